"""ASGI entrypoint for the adherence engine API."""

from adherence_engine.api.app import create_app
from adherence_engine.containers import build_container

app = create_app(build_container())
