"""
自訂 Exception 體系

統一的錯誤處理階層，讓每種失敗都有明確的分類與訊息。
CLI 最上層 catch ForceCliError，印出紅字後以 exit code 1 結束；
內部則可以精準 catch 子類別 (如 CommandFailedError)。

Exception 樹：
    ForceCliError
    ├── ArgumentError
    │   ├── InvalidArgumentError
    │   └── ArgumentInputClosedError
    ├── ProcessError
    │   ├── CommandFailedError
    │   ├── CommandNotFoundError
    │   └── ToolVersionError
    ├── TemplateError
    │   ├── TemplateNotFoundError
    │   └── InvalidTemplateError
    ├── ProjectDirExistsError
    └── MatrixConfigError
"""


class ForceCliError(Exception):
    """CLI 所有例外的基底，catch 這個就能攔截一切 CLI 錯誤"""

    def __init__(self, message: str = "", context: dict | None = None):
        self.context = context or {}
        super().__init__(message)


# ── 參數相關 ──

class ArgumentError(ForceCliError):
    """參數收集相關錯誤"""


class InvalidArgumentError(ArgumentError):
    """參數值驗證失敗（且無法再詢問使用者）"""

    def __init__(self, name: str = "", message: str = ""):
        super().__init__(
            message or f"Invalid value for {name}",
            context={"name": name},
        )


class ArgumentInputClosedError(ArgumentError):
    """互動輸入在取得有效值前就結束 (EOF)"""

    def __init__(self, name: str = ""):
        super().__init__(
            f"Input closed while waiting for {name}",
            context={"name": name},
        )


# ── 外部指令相關 ──

class ProcessError(ForceCliError):
    """外部指令相關錯誤"""


class CommandFailedError(ProcessError):
    """外部指令回傳非 0"""

    def __init__(self, cmd: list[str] | None = None, returncode: int = 0, output: str = ""):
        self.cmd = list(cmd or [])
        self.returncode = returncode
        self.output = output
        msg = f"Command failed ({returncode}): {' '.join(self.cmd)}"
        if output:
            msg += f"\n{output.strip()}"
        super().__init__(msg, context={"cmd": self.cmd, "returncode": returncode})


class CommandNotFoundError(ProcessError):
    """找不到外部指令執行檔"""

    def __init__(self, program: str = ""):
        super().__init__(
            f"Command not found: {program}",
            context={"program": program},
        )


class ToolVersionError(ProcessError):
    """外部工具版本過舊或無法辨識"""

    def __init__(self, tool: str = "", found: str = "", required: str = ""):
        if found:
            msg = f"{tool} version {found} is too old, {required} or above is required"
        else:
            msg = f"Could not determine {tool} version ({required} or above is required)"
        super().__init__(
            msg, context={"tool": tool, "found": found, "required": required}
        )


# ── Template 相關 ──

class TemplateError(ForceCliError):
    """Template 相關錯誤"""


class TemplateNotFoundError(TemplateError):
    """找不到 template 目錄或描述檔"""

    def __init__(self, path: str = ""):
        super().__init__(f"Template not found: {path}", context={"path": path})


class InvalidTemplateError(TemplateError):
    """Template 描述檔內容無效"""

    def __init__(self, path: str = "", reason: str = ""):
        msg = f"Invalid template descriptor: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, context={"path": path})


# ── 專案 / 測試矩陣 ──

class ProjectDirExistsError(ForceCliError):
    """輸出路徑已存在，且不是空目錄（非空目錄或一般檔案）"""

    def __init__(self, path: str = ""):
        super().__init__(
            f"Output path already exists and is not an empty directory: {path}",
            context={"path": path},
        )


class MatrixConfigError(ForceCliError):
    """測試矩陣參數組合無效"""
