"""
CLI Command Handlers.
"""

from cst_insights.cli.handlers.check import collect_files, handle_check
from cst_insights.cli.handlers.rules import handle_rules

__all__ = ["collect_files", "handle_check", "handle_rules"]
