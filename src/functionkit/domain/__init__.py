"""Domain model for service plugins, instances and function naming."""

from .errors import FunctionkitError
from .naming import InvalidFunctionNameError, canonicalize, sanitize
from .project import (
    PROJECT_DESCRIPTOR,
    PROJECT_DIR,
    ProjectConfigError,
    ProjectId,
    ProjectNotInitialisedError,
    ServiceInstance,
    load_instances,
)
from .service import ServicePlugin
from .template import ACTION_DESCRIPTOR, ACTION_PLACEHOLDER, ActionTemplate, TemplateNotFoundError

__all__ = [
    "ACTION_DESCRIPTOR",
    "ACTION_PLACEHOLDER",
    "ActionTemplate",
    "FunctionkitError",
    "InvalidFunctionNameError",
    "PROJECT_DESCRIPTOR",
    "PROJECT_DIR",
    "ProjectConfigError",
    "ProjectId",
    "ProjectNotInitialisedError",
    "ServiceInstance",
    "ServicePlugin",
    "TemplateNotFoundError",
    "canonicalize",
    "load_instances",
    "sanitize",
]
