"""Results returned by the ``in`` and ``out`` steps of a resource."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

VersionT = TypeVar("VersionT")
MetadataT = TypeVar("MetadataT")


@dataclass
class InOutput(Generic[VersionT, MetadataT]):
    """Output of the ``in`` step of the resource."""

    # The fetched version
    version: VersionT
    # Shown on the build page once flattened; None means no metadata at all
    metadata: Optional[MetadataT] = None


@dataclass
class OutOutput(Generic[VersionT, MetadataT]):
    """Output of the ``out`` step of the resource."""

    # The resulting version
    version: VersionT
    # Shown on the build page once flattened; None means no metadata at all
    metadata: Optional[MetadataT] = None
