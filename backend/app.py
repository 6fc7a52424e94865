from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import httpx
from litestar import Litestar
from litestar.datastructures import State
from litestar.di import Provide

from core.config import AppConfig
from core.lark import LarkClient
from core.logging import init_logging, logger
from core.token_cache import TokenCache
from api.options import OptionsController


async def provide_config(state: State) -> AppConfig:
    """Litestar dependency provider for the loaded configuration."""
    return state.config


async def provide_lark_client(state: State) -> LarkClient:
    """Litestar dependency provider for the shared Lark client."""
    return state.lark


def create_app(
    config: AppConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Litestar:
    """Build the application.

    Args:
        config: Configuration to use; loaded from file and environment if None.
        transport: Transport for upstream calls, e.g. httpx.MockTransport.
    """

    @asynccontextmanager
    async def lifespan(app: Litestar) -> AsyncGenerator[None, None]:
        app_config = config or AppConfig.load()
        init_logging(app_config.log_level)
        if config is None and app_config.source is None:
            logger.warning(
                "Config file not found at %s, using environment only",
                AppConfig.config_path(),
            )
        logger.info(
            "Config loaded: lark=%s app_id=%s",
            app_config.lark.base_url,
            app_config.lark.app_id or "<unset>",
        )
        if not app_config.auth_token:
            logger.warning("No auth token configured, all options requests will be rejected")

        http = httpx.AsyncClient(transport=transport)
        app.state.config = app_config
        app.state.lark = LarkClient(http, app_config.lark, TokenCache())
        logger.info("Lark client initialized")

        try:
            yield
        finally:
            await http.aclose()
            logger.info("Lark client closed")

    return Litestar(
        route_handlers=[OptionsController],
        dependencies={
            "config": Provide(provide_config),
            "lark": Provide(provide_lark_client),
        },
        lifespan=[lifespan],
    )


app = create_app()
