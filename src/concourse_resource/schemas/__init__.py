"""Schema exports."""

from .base import Empty, EnvelopeBase
from .build import BuildMetadata
from .envelopes import CheckInput, InInput, InOutputKV, KV, OutInput, OutOutputKV
from .outputs import InOutput, OutOutput

__all__ = [
    "Empty",
    "EnvelopeBase",
    "BuildMetadata",
    "CheckInput",
    "InInput",
    "InOutputKV",
    "KV",
    "OutInput",
    "OutOutputKV",
    "InOutput",
    "OutOutput",
]
