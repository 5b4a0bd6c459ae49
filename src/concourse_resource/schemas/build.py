"""Build metadata schema.

When used in a ``get`` or ``put`` step, metadata about the running build is
made available to the resource via environment variables.

If the build is a one-off, ``name``, ``job_name``, ``pipeline_name`` and
``pipeline_instance_vars`` are None. ``pipeline_instance_vars`` is also None
when the pipeline is a regular pipeline rather than a pipeline instance.

Reference: https://concourse-ci.org/implementing-resource-types.html#resource-metadata
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

from pydantic import ConfigDict, Field

from concourse_resource.utils.json_io import dump_compact_json

from .base import EnvelopeBase


def _segment(value: str) -> str:
    # Names may contain "/" which must not split the URL path
    return quote(value, safe="")


class BuildMetadata(EnvelopeBase):
    """Context of the build running the current step."""

    model_config = ConfigDict(frozen=True)

    # Internal identifier of the build; numeric today but may become a guid
    id: str
    # Build number within the build's job
    name: Optional[str] = None
    job_name: Optional[str] = None
    pipeline_name: Optional[str] = None
    # Used to differentiate pipeline instances
    pipeline_instance_vars: Optional[Dict[str, Any]] = Field(default=None)
    team_name: str
    # Public URL of the ATC; useful for debugging
    atc_external_url: str

    @property
    def is_one_off(self) -> bool:
        """True when the build does not belong to a job."""
        return self.job_name is None

    def build_url(self) -> str:
        """Return the web UI URL of the build.

        Job builds link to ``/teams/<team>/pipelines/<pipeline>/jobs/<job>/builds/<name>``
        (with instance vars as ``vars.<key>`` query parameters), one-off builds
        to ``/builds/<id>``.
        """
        base = self.atc_external_url.rstrip("/")
        if self.is_one_off or self.pipeline_name is None or self.name is None:
            return f"{base}/builds/{self.id}"

        url = (
            f"{base}/teams/{_segment(self.team_name)}/pipelines/{_segment(self.pipeline_name)}"
            f"/jobs/{_segment(self.job_name)}/builds/{_segment(self.name)}"
        )
        if self.pipeline_instance_vars:
            query = "&".join(
                f"vars.{_segment(key)}={_segment(dump_compact_json(value))}"
                for key, value in self.pipeline_instance_vars.items()
            )
            url = f"{url}?{query}"
        return url
