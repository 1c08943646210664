"""
測試矩陣執行器
對每個 (os, app type) 組合：以非互動方式呼叫 forceios / forcedroid 產生 App，
再呼叫對應的原生建置指令確認產出的專案能編譯。

流程：
    1. 建立暫存目錄
    2. 把本 CLI 打包安裝到暫存目錄的 venv（取得 forceios / forcedroid）
    3. 有 hybrid 時：clone cordova plugin repo 並執行 tools/update.sh
    4. 逐一 create + compile，結果記錄到 MatrixReport
"""

import sys
from pathlib import Path

from config.config import BASE_DIR, Config
from core.exceptions import ForceCliError
from generator.schema import AppType
from generator.template import load_template_spec
from matrix.report import COMPILE, GENERATE, MatrixReport
from utils.console import log, log_error
from utils.logger import logger
from utils.process import is_windows, run_process_catch_error, run_process_throw_error
from utils.repo import clone_repo, mk_tmp_dir, remove_file

OPERATING_SYSTEMS = ("ios", "android")

# 非互動產生時使用的固定值
PACKAGE_NAME = "com.mycompany"
ORGANIZATION = "MyCompany"
START_PAGE = "/apex/testPage"


def get_template_name_from_url(template_repo_url: str) -> str:
    return template_repo_url.rstrip("/").split("/")[-1]


def get_app_type_from_template(template_repo_url: str) -> str:
    """Clone template repo 到獨立暫存目錄，讀出描述檔的 appType 後清除"""
    tmp_dir = mk_tmp_dir()
    try:
        repo_dir = clone_repo(tmp_dir, template_repo_url)
        return load_template_spec(repo_dir).app_type.value
    finally:
        remove_file(tmp_dir)


class MatrixRunner:
    """依序產生並編譯所有 (os, app type) 組合"""

    def __init__(
        self,
        operating_systems: list[str],
        app_types: list[str] | None = None,
        template_repo_url: str = "",
        plugin_repo_url: str = "",
        sdk_branch: str = "",
        project_root=BASE_DIR,
        report: MatrixReport | None = None,
    ):
        self.operating_systems = list(operating_systems)
        self.app_types = list(app_types or [])
        self.template_repo_url = template_repo_url
        self.plugin_repo_url = plugin_repo_url or Config.PLUGIN_REPO_URL
        self.sdk_branch = sdk_branch or Config.SDK_BRANCH
        self.project_root = Path(project_root)
        self.report = report or MatrixReport()
        self.tmp_dir: Path | None = None
        self.plugin_repo_dir: Path | None = None
        self._venv_ready = False

    @property
    def testing_hybrid(self) -> bool:
        return any(AppType(t).is_hybrid for t in self.app_types)

    def run(self) -> MatrixReport:
        self.tmp_dir = mk_tmp_dir()
        log(f"Working directory: {self.tmp_dir}")

        for os_name in self.operating_systems:
            self.create_deploy_force_package(os_name)

        if self.testing_hybrid:
            self.plugin_repo_dir = clone_repo(self.tmp_dir, self.plugin_repo_url)
            for os_name in self.operating_systems:
                self.update_plugin_repo(os_name, self.plugin_repo_dir)

        for os_name in self.operating_systems:
            for app_type in self.app_types:
                self.create_compile_app(os_name, app_type=app_type)
            if self.template_repo_url:
                self.create_compile_app(os_name, template_repo_url=self.template_repo_url)

        return self.report

    # ── 準備 ──

    @property
    def venv_dir(self) -> Path:
        return self.tmp_dir / "venv"

    def _venv_bin(self, name: str) -> Path:
        if is_windows():
            return self.venv_dir / "Scripts" / f"{name}.exe"
        return self.venv_dir / "bin" / name

    def force_path(self, os_name: str) -> Path:
        return self._venv_bin(Config.tool_name(os_name))

    def create_deploy_force_package(self, os_name: str) -> Path:
        """把 CLI 安裝到暫存 venv，回傳該平台的執行檔路徑"""
        if not self._venv_ready:
            log(f"Installing {self.project_root} into {self.venv_dir}")
            run_process_throw_error([sys.executable, "-m", "venv", self.venv_dir])
            run_process_throw_error(
                [self._venv_bin("python"), "-m", "pip", "install", self.project_root]
            )
            self._venv_ready = True
        tool = self.force_path(os_name)
        logger.info(f"{Config.tool_name(os_name)} 已部署: {tool}")
        return tool

    def update_plugin_repo(self, os_name: str, plugin_repo_dir: Path) -> None:
        log(f"Updating cordova plugin at {self.sdk_branch}")
        run_process_throw_error(
            [Path("tools") / "update.sh", "-b", self.sdk_branch, "-o", os_name],
            plugin_repo_dir,
        )

    # ── 產生 + 編譯 ──

    def create_compile_app(self, os_name: str, app_type: str | None = None,
                           template_repo_url: str | None = None) -> bool | None:
        """
        產生並編譯單一 target。

        Returns:
            成功 True、失敗 False；該平台不存在此 app type 時回傳 None
        """
        if app_type == AppType.NATIVE_SWIFT.value and os_name == "android":
            return None

        if app_type is None:
            try:
                app_type_value = get_app_type_from_template(template_repo_url)
            except ForceCliError as e:
                target = f"template {get_template_name_from_url(template_repo_url)} for {os_name}"
                log_error(f"Could not read template: {e}")
                self.report.record(target, GENERATE, False)
                return False
        else:
            app_type_value = app_type

        actual_app_type = AppType(app_type_value)
        target = f"{actual_app_type.value} app for {os_name}"
        if template_repo_url:
            target += f" based on template {get_template_name_from_url(template_repo_url)}"

        app_name = f"{actual_app_type.value}{os_name}App"
        output_dir = self.tmp_dir / app_name

        if app_type is not None:
            force_args = ["create", f"--apptype={app_type}"]
        else:
            force_args = ["createWithTemplate", f"--templaterepourl={template_repo_url}"]
        force_args += [
            f"--appname={app_name}",
            f"--packagename={PACKAGE_NAME}",
            f"--organization={ORGANIZATION}",
            f"--outputdir={output_dir}",
        ]
        if actual_app_type == AppType.HYBRID_REMOTE:
            force_args.append(f"--startpage={START_PAGE}")
        if actual_app_type.is_hybrid:
            force_args.append(f"--pluginrepourl={self.plugin_repo_dir or self.plugin_repo_url}")

        generated = run_process_catch_error(
            [self.force_path(os_name)] + force_args, f"GENERATING {target}"
        )
        self.report.record(target, GENERATE, generated)
        if not generated:
            return False

        cmd, cwd = self.compile_command(os_name, actual_app_type, app_name, output_dir)
        compiled = run_process_catch_error(cmd, f"COMPILING {target}", cwd)
        self.report.record(target, COMPILE, compiled)
        return compiled

    @staticmethod
    def compile_command(os_name: str, app_type: AppType, app_name: str,
                        output_dir: Path) -> tuple[list, Path | None]:
        """回傳 (編譯指令, 執行目錄)"""
        app_dir = output_dir / os_name if app_type == AppType.REACT_NATIVE else output_dir
        gradle = ".\\gradlew.bat" if is_windows() else "./gradlew"

        if app_type.is_native:
            if os_name == "ios":
                workspace = app_dir / f"{app_name}.xcworkspace"
                return [
                    "xcodebuild", "-workspace", workspace, "-scheme", app_name,
                    "clean", "build", "CODE_SIGN_IDENTITY=", "CODE_SIGNING_REQUIRED=NO",
                ], None
            return [gradle, "assembleDebug"], app_dir

        if os_name == "ios":
            return ["cordova", "build"], app_dir
        return [gradle, "assembleDebug"], app_dir / "platforms" / "android"
