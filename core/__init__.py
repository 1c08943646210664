"""
core: CLI 核心

統一匯出參數收集與例外，方便外部 import。

用法：
    from core import ArgProcessorList, add_processor_for, process_args_interactive
    from core import ForceCliError, CommandFailedError
"""

from core.arg_processor import (
    ArgProcessor,
    ArgProcessorList,
    ArgProcessorOutput,
    add_processor_for,
    collect_args,
    process_args_interactive,
)
from core.exceptions import (
    ArgumentError,
    ArgumentInputClosedError,
    CommandFailedError,
    CommandNotFoundError,
    ForceCliError,
    InvalidArgumentError,
    InvalidTemplateError,
    MatrixConfigError,
    ProcessError,
    ProjectDirExistsError,
    TemplateError,
    TemplateNotFoundError,
    ToolVersionError,
)

__all__ = [
    # 參數收集
    "ArgProcessor",
    "ArgProcessorList",
    "ArgProcessorOutput",
    "add_processor_for",
    "collect_args",
    "process_args_interactive",
    # Exceptions
    "ForceCliError",
    "ArgumentError",
    "InvalidArgumentError",
    "ArgumentInputClosedError",
    "ProcessError",
    "CommandFailedError",
    "CommandNotFoundError",
    "ToolVersionError",
    "TemplateError",
    "TemplateNotFoundError",
    "InvalidTemplateError",
    "ProjectDirExistsError",
    "MatrixConfigError",
]
