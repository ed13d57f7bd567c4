"""ASGI entrypoint for the UniBite API."""

from unibite.api.app import create_app
from unibite.containers import build_container

app = create_app(build_container())
