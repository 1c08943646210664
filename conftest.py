"""
pytest 全域 fixtures

提供：
- answers fixture：模擬使用者逐行輸入
- fake_run fixture：攔截 subprocess.run，記錄指令不實際執行
- 暫存目錄指向 tmp_path，避免寫到系統暫存區
"""

from unittest.mock import MagicMock

import pytest

from config.config import Config


@pytest.fixture(autouse=True)
def isolated_tmp_dir(tmp_path, monkeypatch):
    """Config.TMP_DIR 指到每個測試自己的目錄"""
    work = tmp_path / "force-tmp"
    monkeypatch.setattr(Config, "TMP_DIR", work)
    return work


@pytest.fixture
def answers():
    """
    模擬 input()：依序回傳預設答案，用完後拋出 EOFError。

    用法：
        ask = answers("MyApp", "com.acme.app")
        collect_args({}, processors, ask)
        assert ask.prompts == [...]
    """
    def factory(*values):
        queue = list(values)

        def ask(prompt=""):
            ask.prompts.append(prompt)
            if not queue:
                raise EOFError
            return queue.pop(0)

        ask.prompts = []
        return ask

    return factory


@pytest.fixture
def fake_run(monkeypatch):
    """
    取代 utils.process 內的 subprocess.run。

    fake_run.calls 為每次呼叫的指令列表；
    fake_run.fail_when(pred) 讓符合條件的指令回傳 returncode=1；
    fake_run.stdout 設定回傳的 stdout。
    """
    calls: list[dict] = []
    failures: list = []

    def run(cmd, cwd=None, capture_output=False, text=False):
        calls.append({"cmd": list(cmd), "cwd": cwd})
        failed = any(pred(cmd) for pred in failures)
        return MagicMock(
            returncode=1 if failed else 0,
            stdout=run.stdout,
            stderr="boom" if failed else "",
        )

    run.calls = calls
    run.stdout = "9.9.9"
    run.fail_when = failures.append
    run.commands = lambda: [c["cmd"] for c in calls]

    monkeypatch.setattr("utils.process.subprocess.run", run)
    return run
