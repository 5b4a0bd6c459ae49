"""concourse_resource package root.

Helpers to implement a Concourse resource type in Python: subclass
``Resource``, declare the payload types and run it with ``create_resource``.

Reference: https://concourse-ci.org/implementing-resource-types.html
"""

__version__ = "0.1.0"

from concourse_resource.build_metadata_loader import read_build_metadata  # noqa: F401
from concourse_resource.entrypoint import create_resource, main  # noqa: F401
from concourse_resource.exceptions import (  # noqa: F401
    ConfigurationError,
    MissingEnvironmentVariableError,
    ProtocolError,
    ResourceError,
    StepError,
)
from concourse_resource.metadata_kv import into_metadata_kv  # noqa: F401
from concourse_resource.resource import Resource  # noqa: F401
from concourse_resource.schemas import *  # noqa: F401,F403
from concourse_resource.schemas import __all__ as SCHEMA_EXPORTS

__all__ = [
    "__version__",
    "Resource",
    "create_resource",
    "main",
    "into_metadata_kv",
    "read_build_metadata",
    "ResourceError",
    "ProtocolError",
    "ConfigurationError",
    "MissingEnvironmentVariableError",
    "StepError",
] + SCHEMA_EXPORTS
