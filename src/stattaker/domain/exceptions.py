"""
Domain exceptions for the tagging workflow engine.

Pure transitions never raise for malformed workflow data; these cover
misuse of the engine and failures at the submission boundary.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stattaker.domain.models import Phase


class InvalidTransition(Exception):
    """
    Raised when a transition is requested in a phase that does not accept it.

    The engine state is left untouched.
    """

    def __init__(self, action: str, phase: "Phase"):
        """
        Args:
            action: Name of the rejected transition
            phase: Phase the engine was in
        """
        super().__init__(f"Cannot {action} while in phase '{phase.value}'")
        self.action = action
        self.phase = phase


class InvalidLineup(Exception):
    """Raised when a lineup cannot be submitted (no players, no lineup workflow)."""

    pass


class InvalidGameClock(Exception):
    """Raised when the game clock fields cannot be parsed."""

    pass


class StoreError(Exception):
    """
    Raised by event store adapters when a create or fetch fails.

    Carries the remote store's validation errors when it returned any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: dict[str, list[str]] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or {}


class SubmissionFailed(Exception):
    """
    Raised when sending a traversal's requests to the store fails.

    The engine keeps its queued events so the user can retry without
    re-answering the workflow.
    """

    def __init__(self, message: str, cause: StoreError):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(Exception):
    """Raised when workflow definition files are missing or invalid."""

    pass
