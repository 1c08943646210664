from utils.logger import logger
from utils.console import COLOR, log, log_error

__all__ = [
    "logger",
    "COLOR",
    "log",
    "log_error",
]
