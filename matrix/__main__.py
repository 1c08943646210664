"""
測試矩陣 CLI 入口 (forcetest)

用法:
    # 所有 native 類型在兩個平台上產生並編譯
    forcetest --os=ios,android --apptype=native,react_native

    # 用自訂 template
    forcetest --os=android --templaterepourl=https://github.com/forcedotcom/SmartSyncExplorerReactNative#unstable

    # hybrid：先 clone plugin repo 並切到指定 SDK 分支
    forcetest --os=ios --apptype=hybrid_local --sdkbranch=dev

    # 不安裝時
    python -m matrix --usage
"""

import argparse
import sys

from config.config import Config
from core.exceptions import ForceCliError, MatrixConfigError
from matrix.runner import OPERATING_SYSTEMS, MatrixRunner
from utils.console import COLOR, log, log_error
from utils.logger import logger
from utils.process import is_windows


def clean_split(value: str | None, delimiter: str = ",") -> list[str]:
    """與 str.split 相同，但 None 與 '' 回傳 []"""
    if not value:
        return []
    return value.split(delimiter)


def validate_operating_systems(chosen: list[str]) -> None:
    if not chosen:
        raise MatrixConfigError("You need to specify at least one os")
    for os_name in chosen:
        if os_name not in OPERATING_SYSTEMS or (is_windows() and os_name == "ios"):
            raise MatrixConfigError(f"Invalid os: {os_name}", context={"os": os_name})


def validate_app_types_template_repo_url(chosen_app_types: list[str], template_repo_url: str) -> None:
    if bool(chosen_app_types) == bool(template_repo_url):
        raise MatrixConfigError("You need to specify apptype or templaterepourl (but not both)")
    valid = Config.all_app_types()
    for app_type in chosen_app_types:
        if app_type not in valid:
            raise MatrixConfigError(f"Invalid appType: {app_type}", context={"apptype": app_type})


def usage() -> None:
    log("Usage:\n", COLOR.cyan)
    log("  forcetest --usage", COLOR.magenta)
    log("\n OR \n", COLOR.cyan)
    log("  forcetest", COLOR.magenta)
    log("    --os=os1,os2,etc", COLOR.magenta)
    log("    --apptype=appType1,appType2,etc OR --templaterepourl=TEMPLATE_REPO_URL", COLOR.magenta)
    log("    [--pluginrepourl=PLUGIN_REPO_URL (Defaults to PLUGIN_REPO_URL setting)]", COLOR.magenta)
    log(f"    [--sdkbranch=SDK_BRANCH (Defaults to {Config.SDK_BRANCH})]", COLOR.magenta)
    log("", COLOR.cyan)
    log("  Where:", COLOR.cyan)
    log(f"  - osX is : {' or '.join(OPERATING_SYSTEMS)}", COLOR.cyan)
    log(f"  - appTypeX is: {', '.join(Config.all_app_types())}", COLOR.cyan)
    log("  - templaterepourl is a template repo url "
        "e.g. https://github.com/forcedotcom/SmartSyncExplorerReactNative#unstable", COLOR.cyan)
    log("", COLOR.cyan)
    log("  If hybrid is targeted, the following are first done:", COLOR.cyan)
    log("  - clones PLUGIN_REPO_URL", COLOR.cyan)
    log("  - runs ./tools/update.sh -b SDK_BRANCH to update clone of plugin repo", COLOR.cyan)
    log("", COLOR.cyan)
    log("  If ios is targeted:", COLOR.cyan)
    log("  - installs forceios into a virtualenv in a temporary directory", COLOR.cyan)
    log("  - creates and compiles the application types using specified template and plugin",
        COLOR.cyan)
    log("", COLOR.cyan)
    log("  If android is targeted:", COLOR.cyan)
    log("  - installs forcedroid into a virtualenv in a temporary directory", COLOR.cyan)
    log("  - creates and compiles the application types using specified template and plugin",
        COLOR.cyan)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forcetest",
        description="產生並編譯 forceios / forcedroid 的 App 組合",
        allow_abbrev=False,
    )
    parser.add_argument("--os", default="", help="ios,android")
    parser.add_argument("--apptype", default="", help="以逗號分隔的 app type")
    parser.add_argument("--templaterepourl", default="", help="template repo url (可加 #branch)")
    parser.add_argument("--pluginrepourl", default="", help="cordova plugin repo url")
    parser.add_argument("--sdkbranch", default=Config.SDK_BRANCH, help="plugin repo 更新用的 SDK 分支")
    parser.add_argument("--usage", action="store_true", help="顯示用法")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.usage:
        usage()
        return 0

    chosen_os = clean_split(args.os)
    chosen_app_types = clean_split(args.apptype)
    try:
        validate_operating_systems(chosen_os)
        validate_app_types_template_repo_url(chosen_app_types, args.templaterepourl)
    except MatrixConfigError as e:
        log_error(f"{e}\n")
        usage()
        return 1

    runner = MatrixRunner(
        chosen_os,
        app_types=chosen_app_types,
        template_repo_url=args.templaterepourl,
        plugin_repo_url=args.pluginrepourl,
        sdk_branch=args.sdkbranch,
    )
    try:
        report = runner.run()
    except ForceCliError as e:
        log_error(f"Test run aborted: {e}")
        logger.error(f"forcetest 中止: {e}", extra={"context": e.context})
        return 1

    report.print_summary()
    return 0 if report.all_passed else 1


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
