"""Function scaffolding."""

from .service import FunctionScaffoldError, FunctionScaffoldService, ScaffoldResult

__all__ = ["FunctionScaffoldError", "FunctionScaffoldService", "ScaffoldResult"]
