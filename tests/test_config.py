"""
Tests for RuntimeConfig loading from pyproject.toml.
"""

import pytest

from cst_insights.config import RuntimeConfig
from cst_insights.errors import ConfigurationError

PYPROJECT = """
[tool.cst_insights]
rules = ["none_comparison", "return_spacing"]
exclude = ["build"]

[tool.cst_insights.rule_exclude]
return_spacing = ["legacy/*.py"]
"""


@pytest.fixture
def project(tmp_path):
  (tmp_path / "pyproject.toml").write_text(PYPROJECT, encoding="utf-8")
  nested = tmp_path / "src" / "pkg"
  nested.mkdir(parents=True)
  return tmp_path


def test_defaults():
  config = RuntimeConfig()
  assert config.rules == []
  assert config.include == ["*.py"]


def test_load_searches_parent_directories(project):
  config = RuntimeConfig.load(search_path=project / "src" / "pkg")

  assert config.rules == ["none_comparison", "return_spacing"]
  assert config.exclude == ["build"]
  assert config.rule_exclude == {"return_spacing": ["legacy/*.py"]}


def test_cli_rules_replace_and_exclude_extends(project):
  config = RuntimeConfig.load(rules=["redundant_pass"], exclude=["dist"], search_path=project)

  assert config.rules == ["redundant_pass"]
  assert config.exclude == ["build", "dist"]


def test_rule_identifiers_are_normalised():
  config = RuntimeConfig(rules=[" return_spacing ", "return_spacing", ""])
  assert config.rules == ["return_spacing"]


def test_invalid_toml_is_a_configuration_error(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.cst_insights\n", encoding="utf-8")
  with pytest.raises(ConfigurationError, match="Unable to read"):
    RuntimeConfig.load(search_path=tmp_path)


def test_invalid_value_is_a_configuration_error(tmp_path):
  (tmp_path / "pyproject.toml").write_text('[tool.cst_insights]\nexclude = "build"\n', encoding="utf-8")
  with pytest.raises(ConfigurationError, match="Invalid configuration"):
    RuntimeConfig.load(search_path=tmp_path)


def test_create_rules_uses_configuration(project):
  rules = RuntimeConfig.load(search_path=project).create_rules()

  assert [r.name for r in rules] == ["none_comparison", "return_spacing"]
  assert rules[1].exclude == ("build", "legacy/*.py")


def test_create_rules_defaults_to_all_bundled():
  names = [r.name for r in RuntimeConfig().create_rules()]
  assert set(names) == {"none_comparison", "redundant_pass", "return_spacing"}


def test_create_rules_rejects_unknown():
  with pytest.raises(ConfigurationError):
    RuntimeConfig(rules=["unknown"]).create_rules()
