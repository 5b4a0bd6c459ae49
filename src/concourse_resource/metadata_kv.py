"""Flatten resource metadata into the key/value list Concourse displays.

Concourse only understands metadata as ``[{"name": ..., "value": ...}]`` with
string values. Resources describe their metadata as a record instead (pydantic
model, dataclass or mapping) and each field becomes one entry:

- ``name`` is the field name, verbatim and in declaration order (for
  pydantic models, extra and computed fields follow the declared fields and
  fields marked ``exclude=True`` are left out);
- ``value`` is the compact JSON encoding of the field value, except that
  strings are emitted as their raw content (``Han Solo``, not ``"Han Solo"``).

So ``commit="sha", author="Han Solo", mr_iid=1`` flattens to
``commit=sha``, ``author=Han Solo``, ``mr_iid=1``.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from concourse_resource.exceptions import PayloadEncodeError
from concourse_resource.schemas import KV
from concourse_resource.utils.json_io import dump_compact_json

logger = logging.getLogger(__name__)


def render_metadata_value(value: Any) -> str:
    """Render one metadata value as the string shown on the build page.

    Args:
        value: Any JSON-encodable value (pydantic models, dataclasses, enums
            and datetimes included).

    Returns:
        Raw content for strings, compact JSON for every other kind.

    Raises:
        PayloadEncodeError: If the value cannot be encoded as JSON.
    """
    try:
        jsonable = to_jsonable_python(value)
    except PydanticSerializationError as exc:
        raise PayloadEncodeError(f"metadata value {value!r} is not JSON serializable: {exc}")

    if isinstance(jsonable, str):
        return jsonable

    try:
        return dump_compact_json(jsonable)
    except (TypeError, ValueError) as exc:
        raise PayloadEncodeError(f"metadata value {value!r} is not JSON serializable: {exc}")


def metadata_fields(metadata: Any) -> List[Tuple[str, Any]]:
    """List the ``(name, value)`` fields of a metadata record in declaration order.

    Args:
        metadata: pydantic model, dataclass instance or mapping

    Returns:
        Field name and value pairs

    Raises:
        PayloadEncodeError: If the record type is not supported or its model
            serialization fails
    """
    if isinstance(metadata, BaseModel):
        try:
            dumped = metadata.model_dump(mode="json")
        except PydanticSerializationError as exc:
            raise PayloadEncodeError(f"cannot serialize metadata {type(metadata).__name__}: {exc}")
        # Excluded fields are absent from the dump; extra and computed fields follow the declared ones
        return list(dumped.items())

    if dataclasses.is_dataclass(metadata) and not isinstance(metadata, type):
        return [(field.name, getattr(metadata, field.name)) for field in dataclasses.fields(metadata)]

    if isinstance(metadata, Mapping):
        return [(str(name), value) for name, value in metadata.items()]

    raise PayloadEncodeError(
        f"cannot flatten metadata of type {type(metadata).__name__}: "
        "expected a pydantic model, a dataclass or a mapping"
    )


def _coerce_kv_list(entries: Iterable[Any]) -> List[KV]:
    result: List[KV] = []
    for entry in entries:
        if isinstance(entry, KV):
            result.append(entry)
            continue
        try:
            result.append(KV.model_validate(entry))
        except ValidationError as exc:
            raise PayloadEncodeError(f"invalid metadata entry {entry!r}: {exc}")
    return result


def into_metadata_kv(metadata: Any) -> Optional[List[KV]]:
    """Turn a metadata record into the list of ``KV`` expected by Concourse.

    Args:
        metadata: Metadata record returned by a step. Objects providing their
            own ``into_metadata_kv()`` method and lists of ``KV`` are used as is.

    Returns:
        None when ``metadata`` is None (no metadata), otherwise one ``KV`` per
        field; a record without fields gives an empty list.

    Raises:
        PayloadEncodeError: If the record or one of its values cannot be encoded
    """
    if metadata is None:
        return None

    custom = getattr(metadata, "into_metadata_kv", None)
    if callable(custom):
        return _coerce_kv_list(custom())

    if isinstance(metadata, (list, tuple)):
        return _coerce_kv_list(metadata)

    entries = [
        KV(name=name, value=render_metadata_value(value))
        for name, value in metadata_fields(metadata)
    ]
    logger.debug("Flattened %s into %d metadata entries", type(metadata).__name__, len(entries))
    return entries


__all__ = ["into_metadata_kv", "metadata_fields", "render_metadata_value"]
