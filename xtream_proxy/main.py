"""
Relay application

Serve with:

    uvicorn --factory xtream_proxy.main:create_app

Settings come from XTREAM_* and PROXY_* environment variables (or .env).
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from xtream_proxy.config import ClientSettings, ProxySettings, setup_logging
from xtream_proxy.routers import main_router
from xtream_proxy.services.action_dispatcher import ActionDispatcher
from xtream_proxy.services.xtream_client import XtreamClient


logger = logging.getLogger(__name__)


def create_app(
    client_settings: ClientSettings | None = None,
    proxy_settings: ProxySettings | None = None,
    *,
    client: XtreamClient | None = None,
) -> FastAPI:
    """
    Build the relay application

    Args:
        client_settings: Upstream settings; loaded from the environment when omitted
        proxy_settings: Downstream settings; loaded from the environment when omitted

    Keyword Args:
        client: Prebuilt client to use instead of one built from client_settings

    Returns:
        Configured FastAPI application
    """
    if proxy_settings is None:
        proxy_settings = ProxySettings()
    setup_logging(proxy_settings.log_level)

    if client is None:
        if client_settings is None:
            client_settings = ClientSettings()
        client = XtreamClient.from_settings(client_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown events"""
        logger.info("="*60)
        logger.info("Xtream Proxy started")
        logger.info(f"  Upstream: {client.transport.host}")
        logger.info(f"  Advertised: {proxy_settings.advertised_url}:{proxy_settings.advertised_port}")
        logger.info("="*60)

        yield

        logger.info("Shutting down Xtream Proxy...")
        client.close()
        logger.info("Xtream Proxy stopped")

    app = FastAPI(
        title="Xtream Proxy",
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.proxy_settings = proxy_settings
    app.state.client = client
    app.state.dispatcher = ActionDispatcher(client, proxy_settings)

    app.include_router(main_router)

    return app

