"""Fixed names, exit codes and environment settings for Concourse resources.

Concourse runs a resource by executing ``/opt/resource/check``,
``/opt/resource/in`` or ``/opt/resource/out`` inside the resource container.

Reference: https://concourse-ci.org/implementing-resource-types.html
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

RESOURCE_DIR = "/opt/resource"

STEP_CHECK = "check"
STEP_IN = "in"
STEP_OUT = "out"
STEPS = (STEP_CHECK, STEP_IN, STEP_OUT)

EXIT_OK = 0
EXIT_STEP_FAILED = 1
EXIT_PROTOCOL_ERROR = 2

# Build metadata, see
# https://concourse-ci.org/implementing-resource-types.html#resource-metadata
ENV_BUILD_ID = "BUILD_ID"
ENV_BUILD_NAME = "BUILD_NAME"
ENV_BUILD_JOB_NAME = "BUILD_JOB_NAME"
ENV_BUILD_PIPELINE_NAME = "BUILD_PIPELINE_NAME"
ENV_BUILD_PIPELINE_INSTANCE_VARS = "BUILD_PIPELINE_INSTANCE_VARS"
ENV_BUILD_TEAM_NAME = "BUILD_TEAM_NAME"
ENV_ATC_EXTERNAL_URL = "ATC_EXTERNAL_URL"

REQUIRED_BUILD_VARIABLES = (ENV_BUILD_ID, ENV_BUILD_TEAM_NAME, ENV_ATC_EXTERNAL_URL)

ENV_LOG_LEVEL = "CONCOURSE_RESOURCE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING


def step_path(step: str) -> str:
    """Return the canonical executable path Concourse uses for a step."""
    return f"{RESOURCE_DIR}/{step}"


def resolve_log_level(environ: Optional[Mapping[str, str]] = None) -> int:
    """Resolve the stderr log level from ``CONCOURSE_RESOURCE_LOG_LEVEL``.

    Args:
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        A ``logging`` level; unknown names fall back to WARNING.
    """
    env = os.environ if environ is None else environ
    level_name = env.get(ENV_LOG_LEVEL, "").strip().upper()
    if not level_name:
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(level_name)
    if isinstance(level, int):
        return level
    return DEFAULT_LOG_LEVEL
