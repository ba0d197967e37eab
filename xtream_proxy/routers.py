from typing import Annotated
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from xtream_proxy.dependencies import get_client, get_dispatcher, verify_credentials
from xtream_proxy.errors import XtreamError
from xtream_proxy.services.action_dispatcher import ActionDispatcher
from xtream_proxy.services.xtream_client import XtreamClient


logger = logging.getLogger(__name__)

main_router = APIRouter()

# Consumed by the router itself, never forwarded to the dispatcher
_RESERVED_PARAMS = frozenset({"username", "password", "action"})


@main_router.get("/")
def root() -> dict:
    """Root endpoint with service information"""
    return {
        "service": "Xtream Proxy",
        "version": "0.1.0",
        "endpoints": {
            "player_api": "/player_api.php - Xtream Codes control API",
            "xmltv": "/xmltv.php - XMLTV guide",
            "health": "/health - Health check"
        }
    }


@main_router.get("/health")
def health_check() -> dict:
    """Health check endpoint"""
    return {"status": "ok"}


@main_router.get("/player_api.php", dependencies=[Depends(verify_credentials)])
def player_api(
    request: Request,
    dispatcher: Annotated[ActionDispatcher, Depends(get_dispatcher)],
) -> Response:
    """
    Relay one Xtream Codes action

    Without an `action` parameter the response is the proxy's login payload.
    """
    query = request.query_params
    params = {
        key: query.getlist(key)
        for key in query.keys()
        if key not in _RESERVED_PARAMS
    }

    result = dispatcher.dispatch(query.get("action"), params)
    return JSONResponse(
        content=result.payload,
        status_code=result.status_code,
        media_type=result.content_type,
    )


@main_router.get("/xmltv.php", dependencies=[Depends(verify_credentials)])
def xmltv(client: Annotated[XtreamClient, Depends(get_client)]) -> Response:
    """Sanitized XMLTV guide"""
    try:
        guide = client.get_xmltv()
    except XtreamError as e:
        logger.error(f"XMLTV retrieval failed: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return Response(content=guide.source, media_type="application/xml")
