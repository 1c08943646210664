"""
資料結構定義
參數收集完成後的 App 設定，以及 template 描述檔的統一格式。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Platform(Enum):
    IOS = "ios"
    ANDROID = "android"


class AppType(Enum):
    NATIVE = "native"
    NATIVE_SWIFT = "native_swift"
    REACT_NATIVE = "react_native"
    HYBRID_LOCAL = "hybrid_local"
    HYBRID_REMOTE = "hybrid_remote"

    @property
    def is_native(self) -> bool:
        # react_native 也走 native 流程（有自己的 ios/ android/ 專案）
        return "native" in self.value

    @property
    def is_hybrid(self) -> bool:
        return not self.is_native


@dataclass
class AppConfig:
    """單次 create 的完整設定"""
    platform: Platform
    app_name: str
    package_name: str
    organization: str
    app_type: AppType | None = None        # createWithTemplate 時由 template 決定
    output_dir: str = ""                   # 空字串 → cwd/app_name
    start_page: str = ""                   # 僅 hybrid_remote
    template_repo_url: str = ""
    template_path: str = ""                # template 在 repo 內的子目錄
    plugin_repo_url: str = ""

    @property
    def project_dir(self) -> Path:
        if self.output_dir:
            return Path(self.output_dir).expanduser().resolve()
        return Path.cwd() / self.app_name

    @classmethod
    def from_args(cls, args_map: dict, platform: Platform) -> "AppConfig":
        """從參數收集的結果建立"""
        app_type = args_map.get("apptype")
        return cls(
            platform=platform,
            app_name=args_map["appname"],
            package_name=args_map["packagename"],
            organization=args_map["organization"],
            app_type=AppType(app_type) if app_type else None,
            output_dir=args_map.get("outputdir", ""),
            start_page=args_map.get("startpage", ""),
            template_repo_url=args_map.get("templaterepourl", ""),
            template_path=args_map.get("templatepath", ""),
            plugin_repo_url=args_map.get("pluginrepourl", ""),
        )


@dataclass
class TemplateSpec:
    """Template 描述檔 (template.json / template.yaml)"""
    app_type: AppType
    app_name: str = ""                     # template 內要被替換的 app 名稱
    package_name: str = ""
    organization: str = ""
    platforms: list[str] = field(default_factory=list)   # 空 → 不限平台

    def replacements(self, config: AppConfig) -> dict[str, str]:
        """template 佔位字串 → 使用者設定值（長字串先替換）"""
        pairs = {
            self.package_name: config.package_name,
            self.organization: config.organization,
            self.app_name: config.app_name,
        }
        pairs = {k: v for k, v in pairs.items() if k}
        return dict(sorted(pairs.items(), key=lambda kv: len(kv[0]), reverse=True))

    @classmethod
    def from_dict(cls, data: dict) -> "TemplateSpec":
        """
        Raises:
            ValueError: appType 不支援，或欄位型別不正確
        """
        platforms = data.get("platforms") or []
        if isinstance(platforms, str):
            platforms = [platforms]
        if not isinstance(platforms, list) or not all(isinstance(p, str) for p in platforms):
            raise ValueError(f"platforms must be a list of names: {platforms!r}")

        return cls(
            app_type=AppType(data["appType"]),
            app_name=_text_field(data, "appName"),
            package_name=_text_field(data, "packageName"),
            organization=_text_field(data, "organization"),
            platforms=platforms,
        )


def _text_field(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string: {value!r}")
    return value
