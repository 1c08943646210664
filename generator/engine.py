"""
Scaffold Engine (核心引擎)
依照收集到的參數 clone template、檢查工具、產生 native 或 hybrid 專案。

使用方式：
    1. 程式化呼叫：
        engine = ScaffoldEngine(Platform.IOS)
        engine.create_app({"apptype": "native", "appname": "MyApp", ...})

    2. CLI：
        forceios create --apptype=native --appname=MyApp ...
"""

import json
from pathlib import Path

from config.config import Config
from core.exceptions import InvalidArgumentError, ProjectDirExistsError
from generator.schema import AppConfig, AppType, Platform, TemplateSpec
from generator.template import copy_template, load_template_spec, prepare_template
from utils.console import COLOR, log
from utils.logger import logger
from utils.process import check_tool_version, run_process_throw_error
from utils.repo import clone_repo, mk_tmp_dir, remove_file

# hybrid app 的 www/bootconfig.json 預設值
BOOTCONFIG_DEFAULTS = {
    "remoteAccessConsumerKey": "3MVG9Iu66FKeHhINkB1l7xt7kR8czFcCTUhgoA8Ol2Ltf1eYHOU4SqQRSEitYFDUpqRWcoQ2.dBv_a1Dyu5xa",
    "oauthRedirectURI": "testsfdc:///mobilesdk/detect/oauth/done",
    "oauthScopes": ["web", "api"],
    "errorPage": "error.html",
    "shouldAuthenticate": True,
    "attemptOfflineLoad": False,
}


class ScaffoldEngine:
    """單一平台 (ios / android) 的 App 產生引擎"""

    def __init__(self, platform: Platform):
        self.platform = platform

    @property
    def app_types(self) -> list[str]:
        return Config.app_types(self.platform.value)

    def create_app(self, args_map: dict) -> dict:
        """
        產生 App 專案。

        Returns:
            {"project_dir": str, "app_type": str, "platform": str}

        Raises:
            ProjectDirExistsError: 輸出路徑已存在且不是空目錄
            InvalidArgumentError: template 的 appType 不支援此平台
            ProcessError / TemplateError: 外部指令或 template 錯誤
        """
        config = AppConfig.from_args(args_map, self.platform)
        project_dir = config.project_dir
        if project_dir.exists() and (not project_dir.is_dir() or any(project_dir.iterdir())):
            raise ProjectDirExistsError(str(project_dir))

        self._resolve_template_location(config)

        tmp_dir = mk_tmp_dir()
        try:
            template_dir, spec = None, None
            if config.template_repo_url:
                check_tool_version("git", Config.MIN_TOOL_VERSIONS["git"])
                repo_dir = clone_repo(tmp_dir, config.template_repo_url)
                template_dir = repo_dir / config.template_path if config.template_path else repo_dir
                spec = load_template_spec(template_dir)
                if config.app_type is None:
                    config.app_type = spec.app_type

            self._check_app_type(config, spec)
            self._check_tools(config)
            self._print_details(config, project_dir)

            if config.app_type.is_native:
                self.create_native_app(config, project_dir, template_dir, spec)
            else:
                self.create_hybrid_app(config, project_dir, template_dir)
        finally:
            remove_file(tmp_dir)

        self._print_next_steps(config, project_dir)
        return {
            "project_dir": str(project_dir),
            "app_type": config.app_type.value,
            "platform": self.platform.value,
        }

    # ── Native ──

    def create_native_app(self, config: AppConfig, project_dir: Path,
                          template_dir: Path, spec: TemplateSpec) -> None:
        """複製 template → 替換名稱 → 安裝相依套件"""
        log(f"Creating {config.app_type.value} app from template", COLOR.cyan)
        copy_template(template_dir, project_dir)
        prepare_template(project_dir, spec, config)

        if (project_dir / "package.json").exists():
            run_process_throw_error(["npm", "install"], project_dir)

        if self.platform == Platform.IOS:
            pod_dir = project_dir / "ios" if config.app_type == AppType.REACT_NATIVE else project_dir
            if (pod_dir / "Podfile").exists():
                run_process_throw_error(["pod", "update"], pod_dir)

    # ── Hybrid ──

    def create_hybrid_app(self, config: AppConfig, project_dir: Path,
                          template_dir: Path | None) -> None:
        """cordova create → 加平台 / plugin → 放入網頁內容與 bootconfig → prepare"""
        os_name = self.platform.value
        plugin_repo_url = config.plugin_repo_url or Config.PLUGIN_REPO_URL
        platform_version = Config.CORDOVA_PLATFORM_VERSIONS[os_name]

        log(f"Creating {config.app_type.value} app with cordova", COLOR.cyan)
        run_process_throw_error(
            ["cordova", "create", project_dir, config.package_name, config.app_name]
        )
        run_process_throw_error(
            ["cordova", "platform", "add", f"{os_name}@{platform_version}"], project_dir
        )
        run_process_throw_error(["cordova", "plugin", "add", plugin_repo_url], project_dir)

        # 移除 cordova 預設網頁
        www_dir = project_dir / "www"
        if www_dir.exists():
            for child in www_dir.iterdir():
                remove_file(child)
        www_dir.mkdir(parents=True, exist_ok=True)

        if config.app_type == AppType.HYBRID_LOCAL and template_dir is not None:
            copy_template(template_dir, www_dir)

        self.write_bootconfig(config, www_dir)
        run_process_throw_error(["cordova", "prepare", os_name], project_dir)

    @staticmethod
    def write_bootconfig(config: AppConfig, www_dir: Path) -> Path:
        bootconfig = dict(BOOTCONFIG_DEFAULTS)
        bootconfig["isLocal"] = config.app_type == AppType.HYBRID_LOCAL
        bootconfig["startPage"] = config.start_page or "index.html"
        path = www_dir / "bootconfig.json"
        path.write_text(json.dumps(bootconfig, indent=2), encoding="utf-8")
        logger.info(f"已寫入 {path}")
        return path

    # ── 內部方法 ──

    def _resolve_template_location(self, config: AppConfig) -> None:
        """create 子指令：依 app type 決定預設 template repo 與子目錄"""
        if config.template_repo_url or config.app_type is None:
            return
        template_path = Config.template_path(self.platform.value, config.app_type.value)
        if template_path is None:
            return
        config.template_repo_url = Config.TEMPLATE_REPO_URL
        config.template_path = config.template_path or template_path

    def _check_app_type(self, config: AppConfig, spec: TemplateSpec | None) -> None:
        if config.app_type.value not in self.app_types:
            raise InvalidArgumentError(
                "apptype",
                f"App type {config.app_type.value} is not supported on {self.platform.value}",
            )
        if spec is not None and spec.platforms and self.platform.value not in spec.platforms:
            raise InvalidArgumentError(
                "templaterepourl",
                f"Template does not support {self.platform.value}",
            )

    def _check_tools(self, config: AppConfig) -> None:
        if config.app_type.is_hybrid:
            check_tool_version("cordova", Config.MIN_TOOL_VERSIONS["cordova"])
        elif self.platform == Platform.IOS:
            check_tool_version("pod", Config.MIN_TOOL_VERSIONS["pod"])

    def _print_details(self, config: AppConfig, project_dir: Path) -> None:
        sep = "-" * 60
        log(sep, COLOR.cyan)
        log(f"Creating {self.platform.value} {config.app_type.value} application using "
            f"Salesforce Mobile SDK {Config.SDK_VERSION}", COLOR.green)
        log(f"  with app name:        {config.app_name}", COLOR.cyan)
        log(f"       package name:    {config.package_name}", COLOR.cyan)
        log(f"       organization:    {config.organization}", COLOR.cyan)
        log(f"  in:                   {project_dir}", COLOR.cyan)
        if config.template_repo_url:
            log(f"  from template repo:   {config.template_repo_url}", COLOR.cyan)
        if config.template_path:
            log(f"       template path:   {config.template_path}", COLOR.cyan)
        if config.app_type.is_hybrid:
            log(f"  with cordova plugin:  {config.plugin_repo_url or Config.PLUGIN_REPO_URL}",
                COLOR.cyan)
        if config.app_type == AppType.HYBRID_REMOTE:
            log(f"  start page:           {config.start_page}", COLOR.cyan)
        log(sep, COLOR.cyan)

    def _print_next_steps(self, config: AppConfig, project_dir: Path) -> None:
        sep = "=" * 60
        app_type = config.app_type
        log(sep, COLOR.cyan)
        log(f"Your application project is ready in {project_dir}.", COLOR.green)
        log("To build the new application, do the following:", COLOR.cyan)

        if app_type.is_hybrid:
            log(f"   - cd {project_dir}", COLOR.cyan)
            log(f"   - cordova build {self.platform.value}", COLOR.cyan)
        elif self.platform == Platform.IOS:
            app_dir = project_dir / "ios" if app_type == AppType.REACT_NATIVE else project_dir
            if app_type == AppType.REACT_NATIVE:
                log(f"   - cd {project_dir} && npm start", COLOR.cyan)
            log(f"   - open {app_dir / (config.app_name + '.xcworkspace')} in Xcode", COLOR.cyan)
            log("   - build and run the application", COLOR.cyan)
        else:
            app_dir = project_dir / "android" if app_type == AppType.REACT_NATIVE else project_dir
            if app_type == AppType.REACT_NATIVE:
                log(f"   - cd {project_dir} && npm start", COLOR.cyan)
            log(f"   - import {app_dir} in Android Studio", COLOR.cyan)
            log("   - build and run the application", COLOR.cyan)

        log(sep, COLOR.cyan)
