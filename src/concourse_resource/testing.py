"""
Helpers to test resources in-process.

The resource is run exactly as Concourse would run it, through ``main``, with
a mocked invocation path, JSON request, environment and captured standard
streams:

    >>> result = run_step(HelloWorld, "in", {"version": {"ver": "static"}}, path=str(tmp_path))
    >>> result.exit_code
    0
    >>> result.json()["version"]
    {'ver': 'static'}
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from io import StringIO
from typing import Any, Dict, Optional
from unittest import mock

from concourse_resource.config import (
    ENV_ATC_EXTERNAL_URL,
    ENV_BUILD_ID,
    ENV_BUILD_JOB_NAME,
    ENV_BUILD_NAME,
    ENV_BUILD_PIPELINE_INSTANCE_VARS,
    ENV_BUILD_PIPELINE_NAME,
    ENV_BUILD_TEAM_NAME,
    step_path,
)
from concourse_resource.entrypoint import ResourceLike, main
from concourse_resource.utils.json_io import dump_compact_json


def create_env_vars(
    one_off_build: bool = False,
    instance_vars: Optional[Dict[str, Any]] = None,
    **env_vars: str,
) -> Dict[str, str]:
    """Create a realistic set of build metadata environment variables.

    Args:
        one_off_build: Omit the job, pipeline and build name variables, as
            Concourse does for one-off builds.
        instance_vars: Pipeline instance vars, exported as JSON.
        env_vars: Additional variables, overriding the defaults.

    Returns:
        Mapping of environment variable names to values.
    """
    env = {
        ENV_BUILD_ID: "12345678",
        ENV_BUILD_TEAM_NAME: "my-team",
        ENV_ATC_EXTERNAL_URL: "https://ci.example.com",
    }
    if not one_off_build:
        env.update({
            ENV_BUILD_NAME: "42",
            ENV_BUILD_JOB_NAME: "my-job",
            ENV_BUILD_PIPELINE_NAME: "my-pipeline",
        })
        if instance_vars:
            env[ENV_BUILD_PIPELINE_INSTANCE_VARS] = dump_compact_json(instance_vars)
    env.update(env_vars)
    return env


@dataclass
class StepResult:
    """Outcome of one resource step."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def json(self) -> Any:
        """Decode the JSON document written to stdout."""
        return json.loads(self.stdout)


def run_step(
    resource: ResourceLike,
    step: str,
    request: Any,
    path: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
    invocation: Optional[str] = None,
    clear_env: bool = False,
) -> StepResult:
    """Run one step of a resource and capture its streams.

    Args:
        resource: Resource subclass or instance
        step: ``check``, ``in`` or ``out``
        request: JSON request; a ``str`` is passed verbatim, anything else is
            JSON-encoded first
        path: Working directory passed to ``in`` and ``out``
        env: Environment variables set for the duration of the step
        invocation: Override of ``argv[0]`` (defaults to ``/opt/resource/<step>``)
        clear_env: Run with only ``env`` set, e.g. to test missing build metadata

    Returns:
        StepResult with exit code and captured stdout/stderr
    """
    argv = [invocation or step_path(step)]
    if path is not None:
        argv.append(path)

    stdin = StringIO(request if isinstance(request, str) else json.dumps(request))
    stdout = StringIO()
    stderr = StringIO()

    with mock.patch.dict(os.environ, env or {}, clear=clear_env):
        exit_code = main(resource, argv=argv, stdin=stdin, stdout=stdout, stderr=stderr)

    return StepResult(exit_code=exit_code, stdout=stdout.getvalue(), stderr=stderr.getvalue())


__all__ = ["create_env_vars", "run_step", "StepResult"]
