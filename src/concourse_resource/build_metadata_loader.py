"""Build metadata loader.

Reads the build metadata environment variables Concourse exposes to the
``in`` and ``out`` steps and parses them into a ``BuildMetadata`` record.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from concourse_resource.config import (
    ENV_ATC_EXTERNAL_URL,
    ENV_BUILD_ID,
    ENV_BUILD_JOB_NAME,
    ENV_BUILD_NAME,
    ENV_BUILD_PIPELINE_INSTANCE_VARS,
    ENV_BUILD_PIPELINE_NAME,
    ENV_BUILD_TEAM_NAME,
    REQUIRED_BUILD_VARIABLES,
)
from concourse_resource.exceptions import MissingEnvironmentVariableError
from concourse_resource.schemas import BuildMetadata
from concourse_resource.utils.json_io import parse_json_object

logger = logging.getLogger(__name__)


def _check_required(environ: Mapping[str, str]) -> None:
    for variable in REQUIRED_BUILD_VARIABLES:
        if variable not in environ:
            raise MissingEnvironmentVariableError(variable)


def read_build_metadata(environ: Optional[Mapping[str, str]] = None) -> BuildMetadata:
    """Assemble build metadata from environment variables.

    Args:
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        BuildMetadata; optional variables that are unset are None

    Raises:
        MissingEnvironmentVariableError: If BUILD_ID, BUILD_TEAM_NAME or
            ATC_EXTERNAL_URL is not set
    """
    env = os.environ if environ is None else environ
    _check_required(env)

    instance_vars = None
    raw_instance_vars = env.get(ENV_BUILD_PIPELINE_INSTANCE_VARS)
    if raw_instance_vars is not None:
        instance_vars, error = parse_json_object(raw_instance_vars)
        if error:
            logger.warning("Ignoring %s: %s", ENV_BUILD_PIPELINE_INSTANCE_VARS, error)

    return BuildMetadata(
        id=env[ENV_BUILD_ID],
        name=env.get(ENV_BUILD_NAME),
        job_name=env.get(ENV_BUILD_JOB_NAME),
        pipeline_name=env.get(ENV_BUILD_PIPELINE_NAME),
        pipeline_instance_vars=instance_vars,
        team_name=env[ENV_BUILD_TEAM_NAME],
        atc_external_url=env[ENV_ATC_EXTERNAL_URL],
    )
