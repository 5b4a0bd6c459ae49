"""Entrypoint dispatching a Concourse invocation to a resource.

The same executable is installed as ``/opt/resource/check``,
``/opt/resource/in`` and ``/opt/resource/out``. Each invocation:

1. reads the JSON request from stdin until EOF,
2. selects the step from the invocation name (``argv[0]``),
3. decodes the request envelope with the resource's payload types,
4. calls the matching ``resource_*`` method (``in`` and ``out`` receive
   ``argv[1]`` as working directory),
5. writes exactly one JSON document followed by a newline to stdout.

Exit codes: 0 on success, 1 when the ``in`` step itself fails, 2 on protocol or
configuration errors. stdout stays empty whenever the exit code is not 0.
"""

from __future__ import annotations

import logging
import sys
from pathlib import PurePosixPath
from typing import Any, List, Optional, Sequence, TextIO, Type, Union

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from concourse_resource.config import (
    EXIT_OK,
    EXIT_PROTOCOL_ERROR,
    EXIT_STEP_FAILED,
    STEP_CHECK,
    STEP_IN,
    STEP_OUT,
    STEPS,
)
from concourse_resource.exceptions import (
    MissingPathError,
    PayloadDecodeError,
    PayloadEncodeError,
    ResourceError,
    StepError,
    UnknownStepError,
)
from concourse_resource.metadata_kv import into_metadata_kv
from concourse_resource.resource import Resource
from concourse_resource.schemas import (
    CheckInput,
    InInput,
    InOutputKV,
    OutInput,
    OutOutputKV,
)
from concourse_resource.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)

ResourceLike = Union[Resource, Type[Resource]]


def step_from_invocation(invocation: str) -> str:
    """Return the step named by the invocation path.

    Args:
        invocation: ``argv[0]``, e.g. ``/opt/resource/check``

    Returns:
        ``check``, ``in`` or ``out``

    Raises:
        UnknownStepError: If the last path component is not a step name
    """
    name = PurePosixPath(invocation).name
    if name in STEPS:
        return name
    raise UnknownStepError(invocation)


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or str(exc)


def _decode(envelope_type: Any, step: str, buffer: str) -> Any:
    try:
        return envelope_type.model_validate_json(buffer)
    except ValidationError as exc:
        raise PayloadDecodeError(step, _describe_validation_error(exc))


def _encode(response_type: Any, step: str, value: Any) -> str:
    adapter = TypeAdapter(response_type)
    try:
        document = adapter.validate_python(value)
        return adapter.dump_json(document, by_alias=True).decode("utf-8")
    except ValidationError as exc:
        raise PayloadEncodeError(_describe_validation_error(exc), step)
    except PydanticSerializationError as exc:
        raise PayloadEncodeError(str(exc), step)


def _working_directory(argv: Sequence[str], step: str) -> str:
    if len(argv) < 2:
        raise MissingPathError(step)
    return argv[1]


def _report_step_failure(exc: BaseException, stderr: TextIO) -> int:
    logger.debug("Step failed", exc_info=exc)
    message = str(exc) or type(exc).__name__
    print(f"Error! {message}", file=stderr)
    return EXIT_STEP_FAILED


def _run_check(resource: Resource, buffer: str) -> str:
    resource_type = type(resource)
    version_type = resource_type.version_type()
    request = _decode(CheckInput[resource_type.Source, version_type], STEP_CHECK, buffer)

    versions = list(resource.resource_check(request.source, request.version))
    logger.debug("check returned %d version(s)", len(versions))
    return _encode(List[version_type], STEP_CHECK, versions)


def _run_in(resource: Resource, argv: Sequence[str], buffer: str, stderr: TextIO) -> Optional[str]:
    resource_type = type(resource)
    version_type = resource_type.version_type()
    request = _decode(
        InInput[resource_type.Source, version_type, resource_type.InParams],
        STEP_IN,
        buffer,
    )
    output_path = _working_directory(argv, STEP_IN)

    try:
        result = resource.resource_in(request.source, request.version, request.params, output_path)
    except StepError as exc:
        _report_step_failure(exc, stderr)
        return None
    except ResourceError:
        raise
    except Exception as exc:
        _report_step_failure(exc, stderr)
        return None

    return _encode(
        InOutputKV[version_type],
        STEP_IN,
        {"version": result.version, "metadata": into_metadata_kv(result.metadata)},
    )


def _run_out(resource: Resource, argv: Sequence[str], buffer: str) -> str:
    resource_type = type(resource)
    version_type = resource_type.version_type()
    request = _decode(
        OutInput[resource_type.Source, resource_type.OutParams],
        STEP_OUT,
        buffer,
    )
    input_path = _working_directory(argv, STEP_OUT)

    result = resource.resource_out(request.source, request.params, input_path)
    return _encode(
        OutOutputKV[version_type],
        STEP_OUT,
        {"version": result.version, "metadata": into_metadata_kv(result.metadata)},
    )


def main(
    resource: ResourceLike,
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Run one resource step and return the process exit code.

    Args:
        resource: Resource subclass (instantiated without arguments) or instance
        argv: Command line, ``argv[0]`` being the invocation path (defaults to ``sys.argv``)
        stdin: Request stream (defaults to ``sys.stdin``)
        stdout: Response stream (defaults to ``sys.stdout``)
        stderr: Diagnostics stream (defaults to ``sys.stderr``)

    Returns:
        0 on success, 1 if the ``in`` step failed, 2 on protocol or
        configuration errors.
    """
    argv = sys.argv if argv is None else argv
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr

    step = None
    try:
        buffer = stdin.read()
        invocation = argv[0] if argv else ""
        step = step_from_invocation(invocation)
        logger.debug("Running %s with a %d byte request", step, len(buffer))

        instance = resource() if isinstance(resource, type) else resource
        if step == STEP_CHECK:
            document = _run_check(instance, buffer)
        elif step == STEP_IN:
            document = _run_in(instance, argv, buffer, stderr)
        else:
            document = _run_out(instance, argv, buffer)
    except ResourceError as exc:
        logger.debug("%s raised", type(exc).__name__, exc_info=exc)
        print(str(exc), file=stderr)
        stderr.flush()
        # Only the in step reports its own failures with exit status 1
        if isinstance(exc, StepError) and step != STEP_IN:
            return EXIT_PROTOCOL_ERROR
        return exc.exit_code

    if document is None:
        stderr.flush()
        return EXIT_STEP_FAILED

    stdout.write(document + "\n")
    stdout.flush()
    return EXIT_OK


def create_resource(resource: ResourceLike) -> None:
    """Run ``resource`` as the current process and exit with its status.

    Call it from the script installed as ``/opt/resource/{check,in,out}``:

        if __name__ == "__main__":
            create_resource(HelloWorld)
    """
    configure_logging()
    sys.exit(main(resource))
