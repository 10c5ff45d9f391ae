"""
Runtime Configuration Store.

Settings come from the `[tool.cst_insights]` table of the nearest
`pyproject.toml`, overridden by explicit (CLI) arguments:

.. code-block:: toml

    [tool.cst_insights]
    rules = ["return_spacing", "none_comparison"]
    exclude = ["build", "migrations/*.py"]

    [tool.cst_insights.rule_exclude]
    redundant_pass = ["tests"]
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from cst_insights.core.rule import Rule
from cst_insights.errors import ConfigurationError

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib


class RuntimeConfig(BaseModel):
  """
  Configuration for a processing run.
  """

  rules: List[str] = Field(default_factory=list, description="Enabled rule identifiers. Empty enables all bundled rules.")
  exclude: List[str] = Field(default_factory=list, description="Glob patterns excluded for every rule.")
  rule_exclude: Dict[str, List[str]] = Field(default_factory=dict, description="Glob patterns excluded per rule.")
  include: List[str] = Field(default_factory=lambda: ["*.py"], description="File patterns collected from directories.")

  @field_validator("rules")
  @classmethod
  def validate_rules(cls, v: List[str]) -> List[str]:
    """
    Strips identifiers and drops duplicates while keeping order.

    Args:
        v (List[str]): Raw identifiers.

    Returns:
        List[str]: Normalised identifiers.
    """
    return list(dict.fromkeys(item.strip() for item in v if item.strip()))

  def create_rules(self) -> List[Rule]:
    """
    Instantiates the configured bundled rules.

    Returns:
        List[Rule]: Rules in configured order (or bundle order if none are configured).

    Raises:
        ConfigurationError: If a configured identifier is unknown.
    """
    from cst_insights.rules import default_rules

    return default_rules(
      enabled=self.rules or None,
      exclude=self.exclude,
      rule_exclude=self.rule_exclude,
    )

  @classmethod
  def load(
    cls,
    rules: Optional[List[str]] = None,
    exclude: Optional[List[str]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and applies overrides.

    Args:
        rules (Optional[List[str]]): Replaces the configured rule list.
        exclude (Optional[List[str]]): Extends the configured exclusions.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.

    Raises:
        ConfigurationError: If the TOML table is malformed.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    final_rules = rules if rules else toml_config.get("rules", [])
    final_exclude = [*toml_config.get("exclude", []), *(exclude or [])]

    try:
      return cls(
        rules=final_rules,
        exclude=final_exclude,
        rule_exclude=toml_config.get("rule_exclude", {}),
        include=toml_config.get("include", ["*.py"]),
      )
    except ValueError as e:
      location = toml_dir / "pyproject.toml" if toml_dir else "defaults"
      raise ConfigurationError(f"Invalid configuration in {location}: {e}") from e


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.

  Raises:
      ConfigurationError: If the first pyproject.toml found cannot be parsed.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Unable to read {toml_path}: {e}") from e

      return data.get("tool", {}).get("cst_insights", {}), parent

  return {}, None
