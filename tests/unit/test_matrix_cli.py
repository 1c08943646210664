"""
matrix.__main__ 單元測試
驗證 forcetest 的參數驗證、--usage 與 exit code。
"""

from unittest.mock import MagicMock, patch

import pytest

from core.exceptions import CommandFailedError, MatrixConfigError
from matrix.__main__ import (
    clean_split,
    main,
    validate_app_types_template_repo_url,
    validate_operating_systems,
)
from matrix.report import GENERATE, MatrixReport


@pytest.mark.unit
class TestCleanSplit:

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        (None, []),
        ("", []),
        ("ios", ["ios"]),
        ("ios,android", ["ios", "android"]),
    ])
    def test_clean_split(self, value, expected):
        assert clean_split(value) == expected


@pytest.mark.unit
class TestValidation:

    @pytest.mark.unit
    def test_os_required(self):
        with pytest.raises(MatrixConfigError, match="at least one os"):
            validate_operating_systems([])

    @pytest.mark.unit
    def test_unknown_os(self):
        with pytest.raises(MatrixConfigError, match="Invalid os: windows"):
            validate_operating_systems(["ios", "windows"])

    @pytest.mark.unit
    def test_ios_rejected_on_windows(self, monkeypatch):
        monkeypatch.setattr("matrix.__main__.is_windows", lambda: True)
        with pytest.raises(MatrixConfigError):
            validate_operating_systems(["ios"])
        validate_operating_systems(["android"])

    @pytest.mark.unit
    def test_app_types_or_template_required(self):
        with pytest.raises(MatrixConfigError, match="but not both"):
            validate_app_types_template_repo_url([], "")

    @pytest.mark.unit
    def test_app_types_and_template_rejected(self):
        with pytest.raises(MatrixConfigError, match="but not both"):
            validate_app_types_template_repo_url(["native"], "https://github.com/x/T")

    @pytest.mark.unit
    def test_unknown_app_type(self):
        with pytest.raises(MatrixConfigError, match="Invalid appType: flutter"):
            validate_app_types_template_repo_url(["native", "flutter"], "")

    @pytest.mark.unit
    def test_valid(self):
        validate_app_types_template_repo_url(["native_swift", "hybrid_remote"], "")
        validate_app_types_template_repo_url([], "https://github.com/x/T")


@pytest.mark.unit
class TestMain:

    @pytest.mark.unit
    def test_usage(self, capsys):
        assert main(["--usage"]) == 0
        assert "forcetest --usage" in capsys.readouterr().out

    @pytest.mark.unit
    def test_invalid_args_print_usage(self, capsys):
        assert main(["--apptype=native"]) == 1
        out = capsys.readouterr().out
        assert "You need to specify at least one os" in out
        assert "Usage:" in out

    @pytest.mark.unit
    def test_all_passed(self, capsys):
        report = MatrixReport()
        report.record("native app for android", GENERATE, True)
        with patch("matrix.__main__.MatrixRunner") as mock_runner:
            mock_runner.return_value.run.return_value = report
            assert main(["--os=android", "--apptype=native", "--sdkbranch=dev"]) == 0

        args, kwargs = mock_runner.call_args
        assert args == (["android"],)
        assert kwargs["app_types"] == ["native"]
        assert kwargs["sdk_branch"] == "dev"
        assert "1/1 steps passed" in capsys.readouterr().out

    @pytest.mark.unit
    def test_failure_exit_code(self):
        report = MatrixReport()
        report.record("native app for android", GENERATE, False)
        with patch("matrix.__main__.MatrixRunner") as mock_runner:
            mock_runner.return_value.run.return_value = report
            assert main(["--os=android", "--apptype=native"]) == 1

    @pytest.mark.unit
    def test_setup_failure_aborts(self, capsys):
        runner = MagicMock()
        runner.run.side_effect = CommandFailedError(["git", "clone"], 128, "fatal")
        with patch("matrix.__main__.MatrixRunner", return_value=runner):
            assert main(["--os=ios", "--apptype=hybrid_local"]) == 1
        assert "Test run aborted" in capsys.readouterr().out
