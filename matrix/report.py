"""
測試矩陣結果
記錄每個 target 的產生 / 編譯結果，最後輸出通過 / 失敗摘要。
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.table import Table

from utils.console import COLOR, console
from utils.logger import logger

GENERATE = "generate"
COMPILE = "compile"


@dataclass
class TargetResult:
    target: str          # 如 "native app for ios"
    stage: str           # generate / compile
    passed: bool


@dataclass
class MatrixReport:
    results: list[TargetResult] = field(default_factory=list)

    def record(self, target: str, stage: str, passed: bool) -> TargetResult:
        result = TargetResult(target, stage, passed)
        self.results.append(result)
        logger.info(f"[{'PASS' if passed else 'FAIL'}] {stage} {target}")
        return result

    @property
    def passed(self) -> list[TargetResult]:
        return [r for r in self.results if r.passed]

    @property
    def failed(self) -> list[TargetResult]:
        return [r for r in self.results if not r.passed]

    @property
    def all_passed(self) -> bool:
        return not self.failed

    def print_summary(self) -> None:
        """輸出結果表格與統計"""
        if not self.results:
            console.print("No target was run", style=COLOR.yellow)
            return

        table = Table(title="Test matrix summary")
        table.add_column("Target")
        table.add_column("Stage")
        table.add_column("Result")
        for r in self.results:
            table.add_row(
                r.target, r.stage,
                "[green]PASS[/green]" if r.passed else "[red]FAIL[/red]",
            )
        console.print(table)

        total = len(self.results)
        style = COLOR.green if self.all_passed else COLOR.red
        console.print(
            f"{len(self.passed)}/{total} steps passed, {len(self.failed)} failed",
            style=style, markup=False,
        )
