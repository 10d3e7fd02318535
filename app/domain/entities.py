from __future__ import annotations

import logging
from typing import Optional, Tuple

from pydantic import BaseModel

from app.data.models import BridgeConfig
from app.domain.documents import build_maven_metadata, build_pom
from app.domain.errors import ArtifactNotFoundError, UnknownPathError
from app.domain.maven_utils import sha1_hex
from app.domain.models import Download, ReleaseDetail
from app.services.caching import CatalogCache, ReleaseDetailCache

logger = logging.getLogger(__name__)

ARTIFACT_KINDS: Tuple[str, ...] = ("client", "server")

OCTET_STREAM = "application/octet-stream"


def is_artifact_kind(kind: str) -> bool:
    return kind in ARTIFACT_KINDS


class ResolvedArtifact(BaseModel):
    """
    Outcome of resolving a per-release file: either a redirect to the origin
    download or a body generated here.
    """

    redirect_url: Optional[str] = None
    body: Optional[bytes] = None
    media_type: str = OCTET_STREAM


class MavenBridge:
    """
    Resolves Maven repository requests against the cached launcher documents.
    """

    def __init__(
        self,
        config: BridgeConfig,
        catalog_cache: CatalogCache,
        release_cache: ReleaseDetailCache,
    ):
        self.config = config
        self.catalog_cache = catalog_cache
        self.release_cache = release_cache

    def _check_kind(self, kind: str) -> None:
        if not is_artifact_kind(kind):
            raise UnknownPathError(f"Unknown artifact kind: {kind}")

    async def maven_metadata(self, kind: str) -> bytes:
        self._check_kind(kind)
        catalog = await self.catalog_cache.get()
        return build_maven_metadata(catalog, kind, self.config).encode("utf-8")

    async def _detail_with_artifact(self, kind: str, release_id: str) -> Tuple[ReleaseDetail, Download]:
        detail = await self.release_cache.get_or_fetch(release_id)
        download = detail.get_download(kind)
        if download is None:
            # e.g. the server side of releases that predate server jars.
            raise ArtifactNotFoundError(kind, release_id)
        return detail, download

    async def artifact_url(self, kind: str, release_id: str) -> str:
        self._check_kind(kind)
        _, download = await self._detail_with_artifact(kind, release_id)
        return download.url

    async def pom(self, kind: str, release_id: str) -> bytes:
        self._check_kind(kind)
        detail, _ = await self._detail_with_artifact(kind, release_id)
        return build_pom(detail, kind, self.config).encode("utf-8")

    async def pom_sha1(self, kind: str, release_id: str) -> bytes:
        return sha1_hex(await self.pom(kind, release_id)).encode("ascii")

    async def resolve(self, kind: str, release_id: str, filename: str) -> ResolvedArtifact:
        """
        Resolve `{kind}/{release_id}/{filename}`.

        Only files named after the artifact itself (`{kind}-{release_id}.*`)
        are known; any other name is an UnknownPathError.
        """
        self._check_kind(kind)
        name = f"{kind}-{release_id}"

        if filename == f"{name}.jar":
            return ResolvedArtifact(redirect_url=await self.artifact_url(kind, release_id))
        if filename == f"{name}.jar.sha1":
            _, download = await self._detail_with_artifact(kind, release_id)
            return ResolvedArtifact(body=download.sha1.lower().encode("ascii"))
        if filename == f"{name}.pom":
            return ResolvedArtifact(body=await self.pom(kind, release_id))
        if filename == f"{name}.pom.sha1":
            return ResolvedArtifact(body=await self.pom_sha1(kind, release_id))

        logger.debug(f"No handler for {kind}/{release_id}/{filename}")
        raise UnknownPathError(f"Unknown file {filename} for {kind} {release_id}")
