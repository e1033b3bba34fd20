"""
Application layer for the tagging workflow engine.

Contains the traversal state machine and the services that coordinate it
with the event store.
"""

from stattaker.application.engine import TaggingEngine
from stattaker.application.session import TaggingSession
from stattaker.application.submission import (
    SubmissionPlan,
    SubmissionResult,
    SubmissionService,
)

__all__ = [
    "SubmissionPlan",
    "SubmissionResult",
    "SubmissionService",
    "TaggingEngine",
    "TaggingSession",
]
