"""
Custom exception classes for concourse_resource.

This module defines structured exception types for protocol failures
(invocation, decoding, encoding), configuration errors and step failures.
"""

from typing import Optional

from concourse_resource.config import EXIT_PROTOCOL_ERROR, EXIT_STEP_FAILED


class ResourceError(Exception):
    """Base exception for all concourse_resource errors."""

    exit_code = EXIT_PROTOCOL_ERROR


class ProtocolError(ResourceError):
    """The exchange with the Concourse host could not be completed."""


class UnknownStepError(ProtocolError):
    """The executable was invoked under a name that is not a resource step."""

    def __init__(self, invocation: str):
        self.invocation = invocation
        super().__init__(f"unexpected being called as '{invocation}'")


class MissingPathError(ProtocolError):
    """The `in` or `out` step was invoked without its directory argument."""

    def __init__(self, step: str):
        self.step = step
        super().__init__(f"expected path as first parameter for '{step}'")


class PayloadDecodeError(ProtocolError):
    """The JSON request read from stdin does not match the step envelope."""

    def __init__(self, step: str, message: str):
        self.step = step
        self.message = message
        super().__init__(f"error deserializing input for '{step}': {message}")


class PayloadEncodeError(ProtocolError):
    """A value returned by the resource cannot be encoded as JSON."""

    def __init__(self, message: str, step: Optional[str] = None):
        self.step = step
        self.message = message
        if step:
            super().__init__(f"error serializing output for '{step}': {message}")
        else:
            super().__init__(f"error serializing output: {message}")


class ConfigurationError(ResourceError):
    """The resource or its environment is misconfigured."""


class MissingEnvironmentVariableError(ConfigurationError):
    """A required build metadata environment variable is not set."""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"environment variable {variable} should be present")


class StepError(ResourceError):
    """Failure of a resource step, reported to Concourse with exit code 1.

    Raise it (or any other exception) from ``resource_in`` when the requested
    version cannot be fetched.
    """

    exit_code = EXIT_STEP_FAILED
