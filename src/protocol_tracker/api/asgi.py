"""ASGI entrypoint for the protocol tracker API."""

from protocol_tracker.api.app import create_app
from protocol_tracker.containers import build_container

app = create_app(build_container())
