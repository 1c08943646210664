"""
CLI 入口 (forceios / forcedroid)

用法:
    # 互動模式：沒給的參數會一個個問你
    forceios create

    # 非互動（全部參數由命令列提供）
    forceios create --apptype=native --appname=MyApp \\
        --packagename=com.mycompany.myapp --organization="Acme, Inc." \\
        --outputdir=./MyApp

    # 從自訂 template repo 產生
    forcedroid createWithTemplate \\
        --templaterepourl=https://github.com/forcedotcom/SmartSyncExplorerReactNative

    # 版本
    forceios version

    # 不安裝時
    python -m generator ios create ...
"""

import sys

from config.config import Config
from core.config_reader import read_config
from core.exceptions import ForceCliError
from generator.engine import ScaffoldEngine
from generator.schema import Platform
from utils.console import log_error
from utils.logger import logger


def run(platform: Platform, argv=None, ask=input) -> int:
    """執行單一平台的 CLI，回傳 exit code"""
    argv = sys.argv[1:] if argv is None else list(argv)
    tool_name = Config.tool_name(platform.value)
    engine = ScaffoldEngine(platform)

    try:
        result = read_config(
            argv, tool_name, Config.SDK_VERSION,
            Config.app_types(platform.value), engine.create_app, ask,
        )
    except ForceCliError as e:
        log_error("Project creation failed")
        log_error(str(e))
        logger.error(f"{tool_name} 失敗: {e}", extra={"context": e.context})
        return 1
    except KeyboardInterrupt:
        log_error("\nAborted")
        return 130

    return result if isinstance(result, int) else 0


def main_ios():
    sys.exit(run(Platform.IOS))


def main_android():
    sys.exit(run(Platform.ANDROID))


def main():
    """python -m generator <ios|android> <command> ..."""
    platforms = {p.value: p for p in Platform}
    if len(sys.argv) < 2 or sys.argv[1] not in platforms:
        log_error(f"Usage: python -m generator <{'|'.join(platforms)}> <command> [options]")
        sys.exit(1)
    sys.exit(run(platforms[sys.argv[1]], sys.argv[2:]))


if __name__ == "__main__":
    main()
