"""
暫存目錄與 git repo 工具
"""

import shutil
import tempfile
from pathlib import Path

from config.config import Config
from utils.logger import logger
from utils.process import run_process_throw_error


def mk_tmp_dir() -> Path:
    """在 Config.TMP_DIR 下建立新的暫存目錄"""
    Config.TMP_DIR.mkdir(parents=True, exist_ok=True)
    tmp_dir = Path(tempfile.mkdtemp(prefix="force-", dir=Config.TMP_DIR))
    logger.info(f"建立暫存目錄: {tmp_dir}")
    return tmp_dir


def split_repo_url(repo_url: str) -> tuple[str, str | None]:
    """
    拆出 url 與分支。

    範例:
        "https://github.com/x/Templates#dev" → ("https://github.com/x/Templates", "dev")
        "https://github.com/x/Templates"     → ("https://github.com/x/Templates", None)
    """
    url, sep, branch = repo_url.partition("#")
    return url, (branch if sep and branch else None)


def repo_name(repo_url: str) -> str:
    """repo 名稱（url 最後一段，去掉 .git）"""
    url, _ = split_repo_url(repo_url)
    name = url.rstrip("/").split("/")[-1]
    return name[:-4] if name.endswith(".git") else name


def clone_repo(tmp_dir, repo_url: str) -> Path:
    """
    Clone repo 到 tmp_dir 底下（淺層 clone）。

    Returns:
        clone 出來的 repo 目錄
    """
    url, branch = split_repo_url(repo_url)
    repo_dir = Path(tmp_dir) / repo_name(repo_url)

    cmd = ["git", "clone"]
    if branch:
        cmd += ["--branch", branch, "--single-branch"]
    cmd += ["--depth", "1", url, str(repo_dir)]

    logger.info(f"Clone {repo_url} → {repo_dir}")
    run_process_throw_error(cmd)
    return repo_dir


def remove_file(path) -> None:
    """刪除檔案或整個目錄，不存在時略過"""
    path = Path(path)
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
