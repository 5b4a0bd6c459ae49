"""Request and response envelopes of the three resource steps.

The envelopes are generic over the payload types declared by the resource and
are parametrised at dispatch time, e.g. ``CheckInput[Source, Version]``.

Reference: https://concourse-ci.org/implementing-resource-types.html
"""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from .base import EnvelopeBase

SourceT = TypeVar("SourceT")
VersionT = TypeVar("VersionT")
ParamsT = TypeVar("ParamsT")


class KV(EnvelopeBase):
    """Single metadata entry shown on the build page."""

    name: str
    value: str


class CheckInput(EnvelopeBase, Generic[SourceT, VersionT]):
    """Request of the ``check`` step.

    ``version`` is None on the very first check of a resource.
    """

    source: Optional[SourceT] = None
    version: Optional[VersionT] = None


class InInput(EnvelopeBase, Generic[SourceT, VersionT, ParamsT]):
    """Request of the ``in`` step; ``version`` is the exact version to fetch."""

    source: Optional[SourceT] = None
    version: VersionT
    params: Optional[ParamsT] = None


class OutInput(EnvelopeBase, Generic[SourceT, ParamsT]):
    """Request of the ``out`` step."""

    source: Optional[SourceT] = None
    params: Optional[ParamsT] = None


class InOutputKV(EnvelopeBase, Generic[VersionT]):
    """Response of the ``in`` step, with metadata already flattened."""

    version: VersionT
    metadata: Optional[List[KV]] = None


class OutOutputKV(EnvelopeBase, Generic[VersionT]):
    """Response of the ``out`` step, with metadata already flattened."""

    version: VersionT
    metadata: Optional[List[KV]] = None
