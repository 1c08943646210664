"""
彩色終端機輸出
使用者看得到的訊息（提示、錯誤、用法說明、結果摘要）一律走這裡，
內部追蹤則交給 utils.logger。
"""

from rich.console import Console

console = Console(highlight=False)


class COLOR:
    """rich style 名稱"""
    red = "red"
    green = "green"
    yellow = "yellow"
    cyan = "cyan"
    magenta = "magenta"


def log(message: str, color: str | None = None) -> None:
    """印出訊息；關閉 markup，使用者輸入的值原樣顯示"""
    console.print(message, style=color, markup=False, soft_wrap=True)


def log_error(message: str) -> None:
    log(message, COLOR.red)
