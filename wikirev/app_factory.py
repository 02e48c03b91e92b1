"""Litestar application assembly."""

from __future__ import annotations

import logging

from litestar import Litestar
from litestar.di import Provide
from litestar.openapi import OpenAPIConfig
from advanced_alchemy.extensions.litestar import SQLAlchemyPlugin

from wikirev.app_config import build_db_config
from wikirev.auth import provide_auth
from wikirev.config import Settings, get_settings
from wikirev.controllers import ROUTE_HANDLERS
from wikirev.lib import observability
from wikirev.lib.exceptions import EXCEPTION_HANDLERS

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> Litestar:
    """Create the wiki API application.

    ``settings`` defaults to :func:`wikirev.config.get_settings`; tests pass
    their own to point at a scratch database.
    """
    settings = settings or get_settings()

    observability.configure(settings)

    db_config = build_db_config(settings)

    async def on_startup(_app: Litestar) -> None:
        observability.instrument_sqlalchemy(db_config.get_engine())
        logger.info("wikirev started (debug=%s)", settings.debug)

    app = Litestar(
        on_startup=[on_startup],
        route_handlers=ROUTE_HANDLERS,
        plugins=[SQLAlchemyPlugin(config=db_config)],
        dependencies={"auth": Provide(provide_auth, sync_to_thread=False)},
        exception_handlers=EXCEPTION_HANDLERS,
        openapi_config=OpenAPIConfig(title="wikirev", version="0.1.0"),
        debug=settings.debug,
    )
    app.state.secret_key = settings.secret_key
    return app
