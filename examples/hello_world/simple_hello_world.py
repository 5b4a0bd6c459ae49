"""Smallest possible resource: a single static version, no configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from concourse_resource import InOutput, Resource, create_resource


class StaticVersion(BaseModel):
    ver: str


class SimpleHelloWorld(Resource):
    Version = StaticVersion

    def resource_check(self, source, version):
        return [StaticVersion(ver="static")]

    def resource_in(self, source, version, params, output_path):
        Path(output_path, "hello_world.txt").write_text("hello, world!")
        return InOutput(version=StaticVersion(ver="static"))

    def resource_out(self, source, params, input_path):
        raise NotImplementedError("this resource cannot be used in a put step")


if __name__ == "__main__":
    create_resource(SimpleHelloWorld)
