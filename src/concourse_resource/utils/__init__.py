"""Utility modules for concourse_resource."""

from .json_io import (
    COMPACT_SEPARATORS,
    dump_compact_json,
    parse_json_object,
)

from .logging_utils import (
    configure_logging,
    LOGGER_NAME,
)

__all__ = [
    # JSON I/O utils
    "COMPACT_SEPARATORS",
    "dump_compact_json",
    "parse_json_object",
    # Logging utils
    "configure_logging",
    "LOGGER_NAME",
]
