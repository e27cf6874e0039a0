"""ASGI entrypoint for the waste tracker API."""

from waste_tracker.api.app import create_app
from waste_tracker.containers import build_container

app = create_app(build_container())
