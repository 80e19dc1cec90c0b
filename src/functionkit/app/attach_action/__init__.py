"""Attach-action workflow."""

from .service import (
    ActionMaterializationError,
    AttachActionService,
    AttachResult,
    AttachState,
    FunctionNameCollisionError,
    PreconditionMissingError,
)

__all__ = [
    "ActionMaterializationError",
    "AttachActionService",
    "AttachResult",
    "AttachState",
    "FunctionNameCollisionError",
    "PreconditionMissingError",
]
