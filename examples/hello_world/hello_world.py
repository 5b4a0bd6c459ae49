"""Hello world resource with typed source, params and metadata.

``in`` writes ``<Action>, <name>!`` to ``hello_world.txt`` and reports what it
said as build metadata. The name comes from the step params, then from the
resource source, then defaults to ``world``.

Install the file as ``/opt/resource/check``, ``/opt/resource/in`` and
``/opt/resource/out`` in the resource image.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from concourse_resource import InOutput, OutOutput, Resource, create_resource


class HelloVersion(BaseModel):
    ver: str


class HelloSource(BaseModel):
    name: Optional[str] = None


class Action(str, Enum):
    HELLO = "hello"
    GOODBYE = "goodbye"

    @property
    def greeting(self) -> str:
        return self.value.capitalize()


class HelloInParams(BaseModel):
    name: Optional[str] = None
    action: Action = Action.HELLO


class HelloInMetadata(BaseModel):
    said: str


STATIC_VERSION = HelloVersion(ver="static")


class HelloWorld(Resource):
    Version = HelloVersion
    Source = HelloSource
    InParams = HelloInParams
    InMetadata = HelloInMetadata

    def resource_check(self, source, version):
        return [STATIC_VERSION]

    def resource_in(self, source, version, params, output_path):
        action = params.action if params else Action.HELLO
        name = (params and params.name) or (source and source.name) or "world"
        hello_world = f"{action.greeting}, {name}!"

        Path(output_path, "hello_world.txt").write_text(hello_world)

        return InOutput(version=STATIC_VERSION, metadata=HelloInMetadata(said=hello_world))

    def resource_out(self, source, params, input_path):
        return OutOutput(version=STATIC_VERSION, metadata=None)


if __name__ == "__main__":
    create_resource(HelloWorld)
