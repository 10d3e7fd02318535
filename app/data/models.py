from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


DEFAULT_CATALOG_URL = "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json"
DEFAULT_ORIGIN_URL = "https://libraries.minecraft.net"


class BridgeConfig(BaseModel):
    """
    Top-level configuration of the bridge.
    Loaded from the JSON file named by MAVEN_BRIDGE_CONFIG (see app/data/config.py).
    """

    catalog_url: str = Field(
        default=DEFAULT_CATALOG_URL,
        description="URL of the upstream version catalog document.",
    )
    origin_url: str = Field(
        default=DEFAULT_ORIGIN_URL,
        description="Static library host that receives every path the bridge does not serve itself.",
    )
    group_id: str = Field(
        default="net.minecraft",
        description="Maven groupId under which the client and server artifacts are published.",
    )
    catalog_ttl_seconds: float = Field(
        default=300.0,
        gt=0,
        description="How long a fetched catalog is considered fresh.",
    )
    upstream_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout applied to every upstream HTTP request.",
    )
    listing_cutoff_release_id: Optional[str] = Field(
        default=None,
        description=(
            "When set, maven-metadata.xml stops listing versions at this release "
            "(the release itself and everything older are left out). Off by default; "
            "earlier deployments cut at 1.12.2."
        ),
    )
    server_listing_floor_release_id: str = Field(
        default="1.2.4",
        description="Oldest release without a server jar; the server listing stops before it.",
    )
    broken_version_markers: List[str] = Field(
        default_factory=lambda: [
            "2.9.1-nightly-20130708-debug3",
            "2.9.1-nightly-20131017",
        ],
        description="Libraries whose version contains one of these markers are left out of generated POMs.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level.",
    )

    @property
    def group_path(self) -> str:
        """URL path prefix for the configured groupId, e.g. /net/minecraft."""
        return "/" + self.group_id.replace(".", "/")
