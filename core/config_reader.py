"""
指令分派與參數定義
forceios / forcedroid 共用：解析子指令 (version / create / createWithTemplate)，
建立對應的參數處理器清單，再交給互動式參數收集。
"""

import argparse
import re

from core.arg_processor import ArgProcessorList, add_processor_for, process_args_interactive
from utils.console import COLOR, log

CREATE = "create"
CREATE_WITH_TEMPLATE = "createWithTemplate"
VERSION = "version"

_NON_EMPTY = re.compile(r"^\S+$")
_HAS_TEXT = re.compile(r"\S+")
_ANYTHING = re.compile(r".*")
_PACKAGE_NAME = re.compile(r"^[a-z]+[a-z0-9_]*(\.[a-z]+[a-z0-9_]*)*$")


def read_config(argv, tool_name: str, tool_version: str, app_types: list[str],
                handler, ask=input):
    """
    解析命令列並執行對應子指令。

    Args:
        argv: 不含程式名稱的參數列表，第一個為子指令
        handler: 參數收集完成後呼叫，接收參數 dict

    Returns:
        version → 0；未知子指令 → 1；create 類 → handler 的回傳值
    """
    argv = list(argv)
    command = argv.pop(0) if argv else ""

    if command == VERSION:
        print(f"{tool_name} version {tool_version}")
        return 0
    if command == CREATE:
        processor_list = create_args_processor_list(app_types)
    elif command == CREATE_WITH_TEMPLATE:
        processor_list = create_args_processor_list(app_types, with_template=True)
    else:
        usage(tool_name, tool_version, app_types)
        return 1

    args_map = parse_command_args(argv, processor_list, prog=f"{tool_name} {command}")
    return process_args_interactive(args_map, processor_list, handler, ask)


def parse_command_args(argv, processor_list: ArgProcessorList, prog: str = "") -> dict:
    """每個參數處理器對應一個 --name 選項；只回傳命令列有提供的值"""
    parser = argparse.ArgumentParser(prog=prog or None, allow_abbrev=False)
    for name in processor_list.names:
        parser.add_argument(f"--{name}", dest=name, default=None)
    args = parser.parse_args(argv)
    return {k: v for k, v in vars(args).items() if v is not None}


def usage(tool_name: str, tool_version: str, app_types: list[str]) -> None:
    log("Usage:\n", COLOR.cyan)
    log(f"{tool_name} {CREATE}", COLOR.magenta)
    log(f"    --apptype=<Application Type> ({', '.join(app_types)})", COLOR.magenta)
    log("    --appname=<Application Name>", COLOR.magenta)
    log("    --packagename=<App Package Identifier> (e.g. com.mycompany.myapp)", COLOR.magenta)
    log("    --organization=<Organization Name> (Your company's/organization's name)", COLOR.magenta)
    log("    --outputdir=<Output directory> (Leave empty for current directory)", COLOR.magenta)
    log("    --startpage=<App Start Page> (The start page of your remote app. "
        "Only required for hybrid_remote)", COLOR.magenta)
    log("\n OR \n", COLOR.cyan)
    log(f"{tool_name} {CREATE_WITH_TEMPLATE}", COLOR.magenta)
    log("    --templaterepourl=<Template repo URL> "
        "(e.g. https://github.com/forcedotcom/SmartSyncExplorerReactNative)", COLOR.magenta)
    log("    --appname=<Application Name>", COLOR.magenta)
    log("    --packagename=<App Package Identifier> (e.g. com.mycompany.myapp)", COLOR.magenta)
    log("    --organization=<Organization Name> (Your company's/organization's name)", COLOR.magenta)
    log("    --outputdir=<Output directory> (Leave empty for current directory)", COLOR.magenta)
    log("\n OR \n", COLOR.cyan)
    log(f"{tool_name} {VERSION}", COLOR.magenta)


def create_args_processor_list(app_types: list[str], with_template: bool = False) -> ArgProcessorList:
    """create / createWithTemplate 的參數處理器清單（順序即詢問順序）"""
    processors = ArgProcessorList()

    if with_template:
        add_processor_for(
            processors, "templaterepourl",
            "Enter URL of repo containing template application:",
            "Invalid value for template repo url: '$val'.", _NON_EMPTY,
        )
    else:
        add_processor_for(
            processors, "apptype",
            f"Enter your application type ({', '.join(app_types)}):",
            f"App type must be {', '.join(app_types)}.",
            lambda val: val in app_types,
        )

    add_processor_for(
        processors, "appname", "Enter your application name:",
        "Invalid value for application name: '$val'.", _NON_EMPTY,
    )
    add_processor_for(
        processors, "packagename",
        "Enter the package name for your app (com.mycompany.myapp):",
        "'$val' is not a valid package name.", _PACKAGE_NAME,
    )
    add_processor_for(
        processors, "organization", "Enter your organization name (Acme, Inc.):",
        "Invalid value for organization: '$val'.", _HAS_TEXT,
    )
    add_processor_for(
        processors, "startpage", "Enter the start page for your app:",
        "Invalid value for start page: '$val'.", _HAS_TEXT,
        condition=lambda args_map: args_map.get("apptype") == "hybrid_remote",
    )
    add_processor_for(
        processors, "outputdir",
        "Enter the output directory for your app (leave empty for the current directory):",
        "Invalid value for output directory: '$val'.", _ANYTHING,
    )

    # 私有參數：不列在 usage，也從不詢問
    add_processor_for(
        processors, "templatepath", None,
        "Invalid value for template path: '$val'.", _ANYTHING,
    )
    add_processor_for(
        processors, "pluginrepourl", None,
        "Invalid value for plugin repo url: '$val'.", _ANYTHING,
    )

    return processors
