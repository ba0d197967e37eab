"""
Request dependencies

The app factory stores the configured client, dispatcher and proxy settings
on `app.state`; these functions hand them to route handlers via Depends.
"""
import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request

from xtream_proxy.config import ProxySettings
from xtream_proxy.services.action_dispatcher import ActionDispatcher
from xtream_proxy.services.xtream_client import XtreamClient


logger = logging.getLogger(__name__)


def get_proxy_settings(request: Request) -> ProxySettings:
    return request.app.state.proxy_settings


def get_client(request: Request) -> XtreamClient:
    return request.app.state.client


def get_dispatcher(request: Request) -> ActionDispatcher:
    return request.app.state.dispatcher


def verify_credentials(
    settings: Annotated[ProxySettings, Depends(get_proxy_settings)],
    username: Annotated[str | None, Query()] = None,
    password: Annotated[str | None, Query()] = None,
) -> None:
    """
    Check downstream credentials against the proxy's own

    Raises:
        HTTPException: 401 when username or password do not match
    """
    if username != settings.user or password != settings.password:
        logger.warning(f"Rejected request with invalid credentials (user: {username!r})")
        raise HTTPException(status_code=401, detail="Invalid credentials")
