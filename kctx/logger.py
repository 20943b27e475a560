import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def resolve_level(level: str) -> int:
    """Map a level name to its number, WARNING for anything unknown"""
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else logging.WARNING


class LoggerManager:
    """
    Central logger for kctx:
    - renders records on stderr through Rich
    - level taken from KCTX_LOG_LEVEL
    - child loggers per component (e.g. 'kctx.switcher')
    """

    def __init__(self, name: str = "kctx", level: str = "WARNING"):
        self.name = name
        self.level = resolve_level(level)

        self.console = Console(stderr=True)
        self.logger = logging.getLogger(name)
        self.logger.setLevel(self.level)
        self._setup_handlers()

    def _setup_handlers(self):
        self.logger.handlers.clear()

        console_handler = RichHandler(
            console=self.console,
            show_time=False,
            show_level=True,
            show_path=False,
            markup=False
        )
        console_handler.setLevel(self.level)
        self.logger.addHandler(console_handler)

    def set_level(self, level: str):
        self.level = resolve_level(level)
        self.logger.setLevel(self.level)
        for handler in self.logger.handlers:
            handler.setLevel(self.level)

    def get_logger(self, submodule: Optional[str] = None):
        """Return the root kctx logger or a tagged child of it"""
        return self.logger.getChild(submodule) if submodule else self.logger


logger_manager = LoggerManager()
logger = logger_manager.get_logger()


def get_logger(submodule: Optional[str] = None):
    """Get a logger instance, optionally with submodule tagging."""
    return logger_manager.get_logger(submodule)
