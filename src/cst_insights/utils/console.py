"""
Console and Logging Utilities.

Reports are written to a rich `Console` held by the module-level `console`
proxy. Log records from the `cst_insights` logger hierarchy are rendered by a
`RichHandler` attached to the same console, so swapping the backend (e.g. for
`Console(record=True)` in tests) redirects both tables and log lines.

The root logger is left alone; embedding applications keep their own logging
setup.
"""

import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

PACKAGE_LOGGER = "cst_insights"

_THEME = Theme({"logging.level.success": "green"})

logger = logging.getLogger(PACKAGE_LOGGER)


class _ConsoleProxy:
  """
  Stable handle on a replaceable `rich.console.Console`.

  Attributes not defined here are looked up on the active backend.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._attach_handler()

  def set_backend(self, new_console: Console) -> None:
    """
    Routes output and package log records to `new_console`.

    Args:
        new_console (Console): The Rich Console instance to use.
    """
    self._backend = new_console
    self._attach_handler()

  def reset(self) -> None:
    """Switches back to a fresh standard output console."""
    self.set_backend(Console(theme=_THEME))

  @property
  def backend(self) -> Console:
    """The currently active Rich Console."""
    return self._backend

  def _attach_handler(self) -> None:
    for handler in list(logger.handlers):
      if isinstance(handler, RichHandler):
        logger.removeHandler(handler)

    logger.addHandler(
      RichHandler(
        console=self._backend,
        show_time=False,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
      )
    )
    logger.setLevel(logging.INFO)
    logger.propagate = False

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Routes console output and log records to `new_console`.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Resets logging and console to standard output."""
  console.reset()


def _emit(level: int, icon: str, msg: str) -> None:
  logger.log(level, f"{icon} {msg}", extra={"markup": True})


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): The message content. May include rich markup.
  """
  _emit(logging.INFO, "ℹ️ ", msg)


def log_success(msg: str) -> None:
  """Logs `msg` at the SUCCESS level."""
  _emit(SUCCESS_LEVEL_NUM, "✅", msg)


def log_warning(msg: str) -> None:
  _emit(logging.WARNING, "⚠️ ", msg)


def log_error(msg: str) -> None:
  _emit(logging.ERROR, "❌", msg)


def log_rule_failure(rule_name: str, path: Path, reason: str) -> None:
  """
  Warns that a rule could not be applied to a file.

  All three values are plain text; markup characters in them are escaped.

  Args:
      rule_name (str): Name of the failing rule.
      path (Path): The processed file.
      reason (str): Message of the originating error.
  """
  log_warning(f"Rule [bold]{escape(rule_name)}[/bold] failed on {escape(str(path))}: {escape(reason)}")


def log_file_rejected(path: Path, reason: str) -> None:
  """
  Reports a file that was aborted before any rule ran.

  Args:
      path (Path): The rejected file.
      reason (str): Why the file could not be resolved or read.
  """
  log_error(f"Skipping {escape(str(path))}: {escape(reason)}")
