"""ASGI entrypoint for the BurnTrack API."""

from burntrack.api.app import create_app
from burntrack.containers import build_container

app = create_app(build_container())
