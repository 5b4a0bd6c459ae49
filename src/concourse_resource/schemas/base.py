"""Common schema utilities and base classes."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict


class EnvelopeBase(BaseModel):
    """Base model for the JSON documents exchanged with Concourse.

    Unknown keys are ignored so that newer hosts can add fields without
    breaking existing resources.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Empty(EnvelopeBase):
    """Payload without any field.

    Usable as ``Source``, ``InParams``, ``InMetadata``, ``OutParams`` or
    ``OutMetadata`` of a resource. Decodes from any JSON object and flattens
    to an empty metadata list.
    """

    def into_metadata_kv(self) -> List[Any]:
        return []
