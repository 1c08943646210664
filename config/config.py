"""
設定管理模組
統一管理 SDK 版本、template / plugin repo 位置、工具最低版本等設定。
支援透過環境變數覆蓋預設值，方便 CI/CD 整合。
"""

import os
import tempfile
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

# 各平台支援的 app type
_APP_TYPES = {
    "ios": ["native", "native_swift", "react_native", "hybrid_local", "hybrid_remote"],
    "android": ["native", "react_native", "hybrid_local", "hybrid_remote"],
}

# template repo 內各 app type 的子目錄
_TEMPLATE_PATHS = {
    "ios": {
        "native": "iOSNativeTemplate",
        "native_swift": "iOSNativeSwiftTemplate",
        "react_native": "ReactNativeTemplate",
        "hybrid_local": "HybridLocalTemplate",
    },
    "android": {
        "native": "AndroidNativeTemplate",
        "react_native": "ReactNativeTemplate",
        "hybrid_local": "HybridLocalTemplate",
    },
}


class Config:
    """CLI 全域設定"""

    TOOL_NAMES = {"ios": "forceios", "android": "forcedroid"}

    # SDK
    SDK_VERSION = os.getenv("SDK_VERSION", "6.0.0")
    SDK_BRANCH = os.getenv("SDK_BRANCH", "unstable")

    # Repo 位置（可用 url#branch 指定分支）
    TEMPLATE_REPO_URL = os.getenv(
        "TEMPLATE_REPO_URL",
        "https://github.com/forcedotcom/SalesforceMobileSDK-Templates#unstable",
    )
    PLUGIN_REPO_URL = os.getenv(
        "PLUGIN_REPO_URL",
        "https://github.com/forcedotcom/SalesforceMobileSDK-CordovaPlugin#unstable",
    )

    # Cordova 平台版本
    CORDOVA_PLATFORM_VERSIONS = {
        "ios": os.getenv("CORDOVA_IOS_VERSION", "4.4.0"),
        "android": os.getenv("CORDOVA_ANDROID_VERSION", "6.2.3"),
    }

    # 外部工具最低版本
    MIN_TOOL_VERSIONS = {
        "git": "2.13.0",
        "cordova": "7.0.0",
        "pod": "1.2.0",
    }

    # 設為 1 時外部指令輸出直接顯示在終端機
    VERBOSE = os.getenv("FORCE_VERBOSE", "").strip() == "1"

    # 暫存目錄
    TMP_DIR = Path(os.getenv("FORCE_TMP_DIR", tempfile.gettempdir()))

    @classmethod
    def app_types(cls, platform: str) -> list[str]:
        """取得平台支援的 app type 清單"""
        return list(_APP_TYPES.get(platform, []))

    @classmethod
    def all_app_types(cls) -> list[str]:
        """所有平台 app type 的聯集（保留宣告順序）"""
        seen: list[str] = []
        for types in _APP_TYPES.values():
            for app_type in types:
                if app_type not in seen:
                    seen.append(app_type)
        return seen

    @classmethod
    def template_path(cls, platform: str, app_type: str) -> str | None:
        """
        取得 app type 在 template repo 內的子目錄。

        Returns:
            子目錄名稱；hybrid_remote 等不需要 template 的類型回傳 None
        """
        return _TEMPLATE_PATHS.get(platform, {}).get(app_type)

    @classmethod
    def tool_name(cls, platform: str) -> str:
        return cls.TOOL_NAMES[platform]
