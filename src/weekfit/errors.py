"""Error and result types shared across services."""

from dataclasses import dataclass
from typing import Any


class BackendError(Exception):
    """A read or write against the data store failed."""


class RecordNotFoundError(BackendError):
    """The addressed row does not exist."""

    def __init__(self, table: str, record_id: Any):
        super().__init__(f"No row in {table} with id {record_id!r}")
        self.table = table
        self.record_id = record_id


class WizardError(Exception):
    """An action was attempted that the wizard's current step does not allow."""


@dataclass
class ActionResult:
    """Outcome of a user-triggered mutation.

    Failures carry a message meant for display and whether retrying the same
    action can reasonably succeed.
    """

    ok: bool
    error: str | None = None
    retryable: bool = False
    value: Any = None

    @classmethod
    def success(cls, value: Any = None) -> "ActionResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str, retryable: bool = True) -> "ActionResult":
        return cls(ok=False, error=error, retryable=retryable)
