"""ASGI entrypoint for the door access API."""

from door_access.api.app import create_app
from door_access.containers import build_container

app = create_app(build_container())
