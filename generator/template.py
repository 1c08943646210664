"""
Template 處理
讀取 template 描述檔、複製 template 到專案目錄、替換 template 內的佔位字串。

描述檔放在 template 目錄根部，支援 JSON 與 YAML：
    template.json / template.yaml / template.yml

    {
        "appType": "native",
        "appName": "NativeTemplate",
        "packageName": "com.salesforce.nativetemplate",
        "organization": "NativeTemplateOrganization",
        "platforms": ["ios"]
    }
"""

import json
import os
import re
import shutil
from pathlib import Path

import yaml

from core.exceptions import InvalidTemplateError, TemplateNotFoundError
from generator.schema import AppConfig, TemplateSpec
from utils.logger import logger

DESCRIPTOR_NAMES = ("template.json", "template.yaml", "template.yml")
_IGNORED = (".git",) + DESCRIPTOR_NAMES


def find_descriptor(template_dir) -> Path:
    template_dir = Path(template_dir)
    if not template_dir.is_dir():
        raise TemplateNotFoundError(str(template_dir))
    for name in DESCRIPTOR_NAMES:
        path = template_dir / name
        if path.exists():
            return path
    raise TemplateNotFoundError(str(template_dir / DESCRIPTOR_NAMES[0]))


def load_template_spec(template_dir) -> TemplateSpec:
    """
    載入 template 描述檔。

    Raises:
        TemplateNotFoundError: 目錄或描述檔不存在
        InvalidTemplateError: 格式錯誤、缺少 appType 或 appType 不支援
    """
    path = find_descriptor(template_dir)
    with open(path, "r", encoding="utf-8") as f:
        try:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise InvalidTemplateError(str(path), str(e)) from e

    if not isinstance(data, dict) or "appType" not in data:
        raise InvalidTemplateError(str(path), "missing appType")
    try:
        spec = TemplateSpec.from_dict(data)
    except ValueError as e:
        raise InvalidTemplateError(str(path), str(e)) from e

    logger.info(f"Template {path.parent.name}: appType={spec.app_type.value}")
    return spec


def copy_template(template_dir, dest) -> Path:
    """複製 template（不含 .git 與描述檔）到 dest，dest 可以已存在"""
    dest = Path(dest)
    shutil.copytree(
        template_dir, dest,
        ignore=shutil.ignore_patterns(*_IGNORED),
        dirs_exist_ok=True,
    )
    return dest


def _substituter(replacements: dict[str, str]):
    """
    回傳一次掃描完成所有替換的函式。
    長的佔位字串優先比對，已替換的結果不會再被較短的佔位字串改到。
    """
    pairs = {old: new for old, new in replacements.items() if old and old != new}
    if not pairs:
        return None
    pattern = re.compile("|".join(
        re.escape(old) for old in sorted(pairs, key=len, reverse=True)
    ))
    return lambda text: pattern.sub(lambda m: pairs[m.group(0)], text)


def replace_in_files(root, replacements: dict[str, str]) -> list[Path]:
    """替換 root 底下所有文字檔內容；二進位檔略過，換行字元 (CRLF / LF) 保持原樣。回傳有變動的檔案"""
    changed: list[Path] = []
    substitute = _substituter(replacements)
    if substitute is None:
        return changed

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d != ".git"]
        for filename in filenames:
            path = Path(dirpath) / filename
            try:
                with open(path, "r", encoding="utf-8", newline="") as f:
                    content = f.read()
            except UnicodeDecodeError:
                continue
            updated = substitute(content)
            if updated != content:
                with open(path, "w", encoding="utf-8", newline="") as f:
                    f.write(updated)
                changed.append(path)
    return changed


def rename_paths(root, replacements: dict[str, str]) -> list[Path]:
    """替換路徑名稱中的佔位字串（由深到淺，避免父目錄先改名）"""
    renamed: list[Path] = []
    substitute = _substituter(replacements)
    if substitute is None:
        return renamed

    for dirpath, dirnames, filenames in os.walk(root, topdown=False):
        for name in filenames + dirnames:
            new_name = substitute(name)
            if new_name != name:
                src = Path(dirpath) / name
                dst = src.with_name(new_name)
                src.rename(dst)
                renamed.append(dst)
    return renamed


def prepare_template(project_dir, spec: TemplateSpec, config: AppConfig) -> dict:
    """把複製好的 template 改成使用者的 app 名稱 / package / 組織（檔案內容與路徑名稱）"""
    replacements = spec.replacements(config)
    changed = replace_in_files(project_dir, replacements)
    renamed = rename_paths(project_dir, replacements)
    logger.info(f"Template 替換完成: {len(changed)} 個檔案, {len(renamed)} 個路徑改名")
    return {"changed": changed, "renamed": renamed}
