"""The interface implemented by a Concourse resource type.

A resource subclasses ``Resource``, declares its payload types as class
attributes and implements the three steps:

    class Version(BaseModel):
        ref: str

    class GitResource(Resource):
        Version = Version
        Source = GitSource

        def resource_check(self, source, version):
            ...

Every payload type is decoded from / encoded to JSON by pydantic, so it may be
a pydantic model, a dataclass, a TypedDict or a plain ``dict``. All of them
except ``Version`` default to ``Empty``.

Reference: https://concourse-ci.org/implementing-resource-types.html
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, List, Optional

from concourse_resource.build_metadata_loader import read_build_metadata
from concourse_resource.exceptions import ConfigurationError
from concourse_resource.schemas import BuildMetadata, Empty, InOutput, OutOutput


class Resource(ABC):
    """Base class for all resource types."""

    # A version of the resource; must be declared by subclasses
    Version: ClassVar[Any]
    # Resource configuration, from the `source` field
    Source: ClassVar[Any] = Empty
    # Parameters of the `in` step, from the `params` field
    InParams: ClassVar[Any] = Empty
    # Metadata of the `in` step, flattened to key/value pairs for the build page
    InMetadata: ClassVar[Any] = Empty
    # Parameters of the `out` step, from the `params` field
    OutParams: ClassVar[Any] = Empty
    # Metadata of the `out` step, flattened to key/value pairs for the build page
    OutMetadata: ClassVar[Any] = Empty

    @classmethod
    def version_type(cls) -> Any:
        """Return the declared ``Version`` type.

        Raises:
            ConfigurationError: If the resource does not declare ``Version``
        """
        version = getattr(cls, "Version", None)
        if version is None:
            raise ConfigurationError(f"resource {cls.__name__} must declare a Version type")
        return version

    @abstractmethod
    def resource_check(self, source: Optional[Any], version: Optional[Any]) -> List[Any]:
        """Detect new versions of the resource.

        Given the configured source and the current version (None on the
        first check), return the new versions in chronological order,
        including the requested version if it is still valid. An empty list
        means there is nothing new.

        Reference: https://concourse-ci.org/implementing-resource-types.html#resource-check
        """

    @abstractmethod
    def resource_in(
        self,
        source: Optional[Any],
        version: Any,
        params: Optional[Any],
        output_path: str,
    ) -> InOutput:
        """Fetch ``version`` of the resource and place it in ``output_path``.

        Raise an exception if the version is unavailable (for example if it
        was deleted); the step then fails with exit code 1.

        Returns the fetched version, and optionally metadata to show on the
        build page.

        Reference: https://concourse-ci.org/implementing-resource-types.html#in
        """

    @abstractmethod
    def resource_out(
        self,
        source: Optional[Any],
        params: Optional[Any],
        input_path: str,
    ) -> OutOutput:
        """Publish a new version of the resource.

        ``input_path`` is the directory containing the build's full set of
        sources. Returns the resulting version and optional metadata.

        Reference: https://concourse-ci.org/implementing-resource-types.html#out
        """

    @staticmethod
    def build_metadata() -> BuildMetadata:
        """Read the metadata of the running build from the environment.

        Only available in ``in`` and ``out`` steps.

        Raises:
            MissingEnvironmentVariableError: If a required variable is missing

        Reference: https://concourse-ci.org/implementing-resource-types.html#resource-metadata
        """
        return read_build_metadata()
