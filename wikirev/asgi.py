"""ASGI entry point: ``hypercorn wikirev.asgi:app``."""

from wikirev.app_factory import create_app
from wikirev.lib import observability

app = observability.instrument_app(create_app())
