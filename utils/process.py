"""
外部指令執行工具
包裝 subprocess，統一處理日誌、錯誤分類與工具版本檢查。

兩種執行方式：
    run_process_throw_error   失敗時拋出 ProcessError
    run_process_catch_error   失敗時印出 !FAILURE 並回傳 False（測試矩陣用）
"""

import re
import subprocess
import sys

from config.config import Config
from core.exceptions import (
    CommandFailedError,
    CommandNotFoundError,
    ProcessError,
    ToolVersionError,
)
from utils.console import COLOR, log, log_error
from utils.logger import logger

_VERSION_PATTERN = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?")


def is_windows() -> bool:
    return sys.platform.startswith("win")


def run_process_throw_error(cmd: list, cwd=None, return_output: bool = False) -> str:
    """
    執行外部指令，失敗時拋出例外。

    Args:
        cmd: 指令與參數列表
        cwd: 執行目錄
        return_output: 回傳 stdout（強制擷取輸出）

    Returns:
        return_output=True 時為 stdout，否則為空字串

    Raises:
        CommandNotFoundError: 找不到執行檔
        CommandFailedError: 回傳碼非 0
    """
    cmd = [str(c) for c in cmd]
    where = f" (cwd={cwd})" if cwd else ""
    logger.info(f"執行指令: {' '.join(cmd)}{where}")

    capture = return_output or not Config.VERBOSE
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            capture_output=capture,
            text=True,
        )
    except FileNotFoundError as e:
        raise CommandNotFoundError(cmd[0]) from e

    if result.returncode != 0:
        output = (result.stderr or result.stdout or "") if capture else ""
        logger.debug(f"指令失敗 ({result.returncode}): {output}")
        raise CommandFailedError(cmd, result.returncode, output)

    return result.stdout if return_output else ""


def run_process_catch_error(cmd: list, msg: str = "", cwd=None) -> bool:
    """執行外部指令，成功回傳 True，失敗印出錯誤並回傳 False"""
    if msg:
        log(f"!START {msg}", COLOR.yellow)
    try:
        run_process_throw_error(cmd, cwd)
    except ProcessError as e:
        if msg:
            log_error(f"!FAILURE {msg}")
        log_error(str(e))
        logger.error(f"{msg or ' '.join(map(str, cmd))} 失敗: {e}")
        return False

    if msg:
        log(f"!SUCCESS {msg}", COLOR.green)
    return True


# ── 工具版本 ──

def parse_version(text: str) -> str | None:
    """從指令輸出中取出第一個 x.y[.z] 版本字串"""
    m = _VERSION_PATTERN.search(text or "")
    return m.group(0) if m else None


def version_tuple(version: str) -> tuple[int, int, int]:
    m = _VERSION_PATTERN.search(version or "")
    if not m:
        return (0, 0, 0)
    major, minor, patch = m.groups()
    return (int(major), int(minor), int(patch or 0))


def check_tool_version(tool: str, min_version: str, cmd: list | None = None) -> str:
    """
    確認外部工具已安裝且版本足夠。

    Returns:
        偵測到的版本字串

    Raises:
        CommandNotFoundError: 工具未安裝
        ToolVersionError: 無法辨識版本或版本過舊
    """
    output = run_process_throw_error(cmd or [tool, "--version"], return_output=True)
    found = parse_version(output)
    if found is None:
        raise ToolVersionError(tool, "", min_version)
    if version_tuple(found) < version_tuple(min_version):
        raise ToolVersionError(tool, found, min_version)
    logger.info(f"{tool} 版本 {found} (需要 >= {min_version})")
    return found
