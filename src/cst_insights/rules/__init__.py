"""
Bundled Rules Package.

Discovers every rule module in this package. A rule module declares a
module-level `RULE` (`BundledRule`); dropping a new module here is enough to
make it available through `build_default_registry` and `default_rules`.
"""

import importlib
import pkgutil
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from cst_insights.core.registry import RegistryBuilder, TransformationRegistry
from cst_insights.core.rule import Rule
from cst_insights.errors import ConfigurationError
from cst_insights.rules.base import BundledRule

_pkg_dir = Path(__file__).parent


def discover_rules() -> Dict[str, BundledRule]:
  """
  Imports all rule modules in this package.

  Returns:
      Dict[str, BundledRule]: Declarations keyed by identifier, sorted by module name.
  """
  found: Dict[str, BundledRule] = {}
  for _, module_name, _ in sorted(pkgutil.iter_modules([str(_pkg_dir)]), key=lambda info: info.name):
    if module_name.startswith("_") or module_name == "base":
      continue
    module = importlib.import_module(f".{module_name}", package=__name__)
    declared = getattr(module, "RULE", None)
    if isinstance(declared, BundledRule):
      found[declared.identifier] = declared
  return found


def build_default_registry(builder: Optional[RegistryBuilder] = None) -> TransformationRegistry:
  """
  Registers all bundled transformations and freezes the registry.

  Args:
      builder: Builder to extend, e.g. one already holding custom rules.

  Returns:
      TransformationRegistry: The frozen registry.
  """
  builder = builder or RegistryBuilder()
  for identifier, declared in discover_rules().items():
    builder.register(identifier, declared.transformer)
  return builder.build()


def default_rules(
  enabled: Optional[Iterable[str]] = None,
  exclude: Iterable[str] = (),
  rule_exclude: Optional[Mapping[str, Iterable[str]]] = None,
) -> List[Rule]:
  """
  Builds `Rule` objects for bundled transformations.

  Args:
      enabled: Identifiers to include, in order. All bundled rules if None.
      exclude: Glob patterns excluded for every rule.
      rule_exclude: Extra glob patterns per rule identifier.

  Returns:
      List[Rule]: Fresh rules with empty result lists.

  Raises:
      ConfigurationError: If an enabled identifier is not bundled.
  """
  declared = discover_rules()
  identifiers = list(enabled) if enabled is not None else list(declared)
  rule_exclude = rule_exclude or {}

  rules = []
  for identifier in identifiers:
    spec = declared.get(identifier)
    if spec is None:
      raise ConfigurationError(f"Unknown rule '{identifier}'. Available rules: {sorted(declared)}")
    patterns = [*exclude, *rule_exclude.get(identifier, ())]
    rules.append(Rule(name=identifier, target=identifier, description=spec.description, exclude=patterns))
  return rules


__all__ = ["BundledRule", "build_default_registry", "default_rules", "discover_rules"]
