from typing import Optional

from app.data.config import get_config
from app.data.models import BridgeConfig
from app.domain.entities import MavenBridge
from app.services.caching import CatalogCache, ReleaseDetailCache
from app.services.upstream import UpstreamClient

_upstream_client: Optional[UpstreamClient] = None
_catalog_cache: Optional[CatalogCache] = None
_release_cache: Optional[ReleaseDetailCache] = None
_bridge: Optional[MavenBridge] = None

def get_bridge_config() -> BridgeConfig:
    return get_config()

def get_upstream_client() -> UpstreamClient:
    global _upstream_client
    if _upstream_client is None:
        config = get_bridge_config()
        _upstream_client = UpstreamClient(
            config.catalog_url,
            timeout=config.upstream_timeout_seconds,
        )
    return _upstream_client

def get_catalog_cache() -> CatalogCache:
    global _catalog_cache
    if _catalog_cache is None:
        _catalog_cache = CatalogCache(
            get_upstream_client().fetch_catalog,
            ttl_seconds=get_bridge_config().catalog_ttl_seconds,
        )
    return _catalog_cache

def get_release_cache() -> ReleaseDetailCache:
    global _release_cache
    if _release_cache is None:
        _release_cache = ReleaseDetailCache(
            get_catalog_cache(),
            get_upstream_client().fetch_release_detail,
        )
    return _release_cache

def get_bridge() -> MavenBridge:
    global _bridge
    if _bridge is None:
        _bridge = MavenBridge(get_bridge_config(), get_catalog_cache(), get_release_cache())
    return _bridge

async def close_dependencies() -> None:
    """
    Close the upstream HTTP client and forget everything built on top of it.
    """
    global _upstream_client, _catalog_cache, _release_cache, _bridge
    if _upstream_client is not None:
        await _upstream_client.aclose()
    _upstream_client = None
    _catalog_cache = None
    _release_cache = None
    _bridge = None
