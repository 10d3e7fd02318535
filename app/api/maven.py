from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse

from app.core.dependencies import get_bridge, get_bridge_config
from app.data.models import BridgeConfig
from app.domain.entities import MavenBridge, is_artifact_kind

logger = logging.getLogger(__name__)

# Mounted under the configured group path (e.g. /net/minecraft) in app/main.py.
router = APIRouter()

# Everything else goes to the origin's static library host. Must be included last.
fallback_router = APIRouter()


def document_response(request: Request, body: bytes, media_type: str) -> Response:
    """
    Serve a generated document. HEAD gets the same headers, without the body.
    """
    headers = {"Content-Length": str(len(body))}
    if request.method == "HEAD":
        return Response(content=b"", media_type=media_type, headers=headers)
    return Response(content=body, media_type=media_type, headers=headers)


def origin_redirect(request: Request, config: BridgeConfig) -> RedirectResponse:
    # The path as the client sent it: %2F and %3F must stay encoded.
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else request.url.path
    url = config.origin_url.rstrip("/") + path
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


# ---------------------------------------------------------------------------
# 1. GET/HEAD {group}/{kind}/maven-metadata.xml
# ---------------------------------------------------------------------------

@router.api_route("/{kind}/maven-metadata.xml", methods=["GET", "HEAD"])
async def get_maven_metadata(
    kind: str,
    request: Request,
    bridge: MavenBridge = Depends(get_bridge),
) -> Response:
    """
    Version listing for the client or server artifact.
    """
    if not is_artifact_kind(kind):
        return origin_redirect(request, bridge.config)

    body = await bridge.maven_metadata(kind)
    return document_response(request, body, "application/xml")


# ---------------------------------------------------------------------------
# 2. GET/HEAD {group}/{kind}/{release_id}/{filename}
# ---------------------------------------------------------------------------

@router.api_route("/{kind}/{release_id}/{filename}", methods=["GET", "HEAD"])
async def get_release_file(
    kind: str,
    release_id: str,
    filename: str,
    request: Request,
    bridge: MavenBridge = Depends(get_bridge),
) -> Response:
    """
    Jars redirect to the upstream download; .pom, .pom.sha1 and .jar.sha1
    are generated here.
    """
    if not is_artifact_kind(kind):
        # e.g. launchwrapper, which lives on the origin host as a real artifact.
        return origin_redirect(request, bridge.config)

    resolved = await bridge.resolve(kind, release_id, filename)
    if resolved.redirect_url is not None:
        return RedirectResponse(resolved.redirect_url, status_code=status.HTTP_302_FOUND)
    return document_response(request, resolved.body, resolved.media_type)


# ---------------------------------------------------------------------------
# 3. Anything else
# ---------------------------------------------------------------------------

@fallback_router.api_route("/{path:path}", methods=["GET", "HEAD"])
async def redirect_to_origin(
    path: str,
    request: Request,
    config: BridgeConfig = Depends(get_bridge_config),
) -> RedirectResponse:
    logger.debug(f"Redirecting {request.method} /{path} to origin")
    return origin_redirect(request, config)
