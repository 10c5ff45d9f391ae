"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- A recording console so tests can assert on rendered CLI output.
- Small factories for registries, rules and source files.
"""

import sys
from pathlib import Path

import libcst as cst
import pytest
from rich.console import Console

# Add src to path so we can import 'cst_insights' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from cst_insights.core.registry import RegistryBuilder  # noqa: E402
from cst_insights.core.source import SourceFile  # noqa: E402
from cst_insights.utils.console import reset_console, set_console  # noqa: E402


class IdentityTransformer(cst.CSTTransformer):
  """Visits everything, changes nothing."""


class ExplodingTransformer(cst.CSTTransformer):
  """Fails on the first name it meets."""

  def visit_Name(self, node: cst.Name) -> None:
    raise RuntimeError(f"cannot handle {node.value}")


class RenameXTransformer(cst.CSTTransformer):
  """Renames every `x` to `renamed`."""

  def leave_Name(self, original_node: cst.Name, updated_node: cst.Name) -> cst.Name:
    if updated_node.value == "x":
      return updated_node.with_changes(value="renamed")
    return updated_node


@pytest.fixture
def recording_console():
  """Routes console and log output into an in-memory recorder."""
  rec = Console(record=True, width=200, force_terminal=False, color_system=None)
  set_console(rec)
  yield rec
  reset_console()


@pytest.fixture
def builder() -> RegistryBuilder:
  """A builder pre-loaded with the test transformers."""
  b = RegistryBuilder()
  b.register("identity", IdentityTransformer)
  b.register("explode", ExplodingTransformer)
  b.register("rename_x", RenameXTransformer)
  return b


@pytest.fixture
def registry(builder):
  return builder.build()


@pytest.fixture
def write_source(tmp_path):
  """Writes text to a file under tmp_path and returns its path."""

  def _write(name: str, text: str) -> Path:
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
    return path

  return _write


@pytest.fixture
def make_source():
  """Builds an in-memory SourceFile."""

  def _make(text: str, name: str = "/virtual/module.py") -> SourceFile:
    return SourceFile.from_text(name, text)

  return _make
