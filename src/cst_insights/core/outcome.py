"""
Explicit Stage Outcomes.

Every pipeline stage returns either a `Success` wrapping its value or a
`Failure` wrapping the rule-scoped error that stopped it. The orchestrator
matches on the variant instead of relying on exceptions unwinding through it.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from cst_insights.errors import InsightsError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
  """A stage completed and produced `value`."""

  value: T

  @property
  def ok(self) -> bool:
    return True


@dataclass(frozen=True)
class Failure:
  """A stage failed with a rule-scoped `error`."""

  error: InsightsError

  @property
  def ok(self) -> bool:
    return False

  @property
  def message(self) -> str:
    """The originating error message."""
    return str(self.error)


Outcome = Union[Success[T], Failure]


def bind(outcome: "Outcome[T]", stage: Callable[[T], "Outcome[U]"]) -> "Outcome[U]":
  """
  Chains `stage` onto a successful outcome; failures pass through unchanged.

  Args:
      outcome: Result of the previous stage.
      stage: Next stage, fed with the previous value.

  Returns:
      Outcome: The next stage's result, or the original failure.
  """
  if isinstance(outcome, Failure):
    return outcome
  return stage(outcome.value)
