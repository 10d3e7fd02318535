"""
Pydantic models for the upstream launcher documents.

This module mirrors the two JSON documents published by the launcher metadata
host:
- the version catalog (version_manifest_v2.json): latest pointers plus the
  ordered list of releases
- the per-release detail document: client/server downloads and libraries

Only the fields the bridge relies on are declared; unknown keys are ignored.
Validation is strict (aware timestamps, hex SHA-1, URLs, integer sizes), so a
change in the upstream shape surfaces as a validation error instead of a
half-built document further down the line.
"""

from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional

from pydantic import (
    AfterValidator,
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    StrictInt,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)


SHA1_PATTERN = r"^[0-9a-fA-F]{40}$"

ReleaseType = Literal["release", "snapshot", "old_beta", "old_alpha"]

_HTTP_URL = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError(f"{value!r} is not a valid http(s) URL") from None
    return value


# Validated as an HttpUrl but kept verbatim: redirects must point at exactly
# the URL upstream published.
UpstreamUrl = Annotated[str, AfterValidator(_check_http_url)]


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


# ---------------------------------------------------------------------------
# Catalog (version_manifest_v2.json)
# ---------------------------------------------------------------------------


class Release(_UpstreamModel):
    """
    One entry of the catalog.

    `url` points at the release detail document. The order of releases in the
    catalog is significant (newest first) and is preserved by Catalog.
    """

    id: str
    type: ReleaseType
    url: UpstreamUrl
    time: AwareDatetime
    release_time: AwareDatetime = Field(alias="releaseTime")
    sha1: str = Field(pattern=SHA1_PATTERN)
    compliance_level: StrictInt = Field(alias="complianceLevel")


class LatestPointers(_UpstreamModel):
    release: str
    snapshot: str


class Catalog(_UpstreamModel):
    latest: LatestPointers
    versions: List[Release]

    @model_validator(mode="after")
    def _latest_pointers_resolve(self) -> "Catalog":
        known = {v.id for v in self.versions}
        for channel, release_id in (
            ("release", self.latest.release),
            ("snapshot", self.latest.snapshot),
        ):
            if release_id not in known:
                raise ValueError(
                    f"latest.{channel} points at unknown release {release_id!r}"
                )
        return self

    def find_release(self, release_id: str) -> Optional[Release]:
        """Return the first release with the given id, in catalog order."""
        for release in self.versions:
            if release.id == release_id:
                return release
        return None

    @property
    def latest_release(self) -> Release:
        release = self.find_release(self.latest.release)
        if release is None:
            raise ValueError(
                f"latest.release points at unknown release {self.latest.release!r}"
            )
        return release


# ---------------------------------------------------------------------------
# Release detail document
# ---------------------------------------------------------------------------


class Download(_UpstreamModel):
    size: StrictInt = Field(ge=0)
    url: UpstreamUrl
    sha1: str = Field(pattern=SHA1_PATTERN)


class ReleaseDownloads(_UpstreamModel):
    client: Download
    # Early releases never shipped a dedicated server jar.
    server: Optional[Download] = None


class LibraryDownloads(_UpstreamModel):
    artifact: Optional[Download] = None
    # Newer detail documents describe natives through a classifier map;
    # otherwise the classifier is a fourth coordinate segment.
    classifiers: Optional[Dict[str, Download]] = None


class Library(_UpstreamModel):
    name: str
    downloads: LibraryDownloads

    @field_validator("name")
    @classmethod
    def _coordinate_has_gav(cls, value: str) -> str:
        parts = value.split(":")
        if len(parts) < 3 or not all(parts[:3]):
            raise ValueError(
                f"library coordinate {value!r} is not group:artifact:version[:classifier]"
            )
        return value


class ReleaseDetail(_UpstreamModel):
    id: str
    downloads: ReleaseDownloads
    libraries: List[Library]

    def get_download(self, kind: str) -> Optional[Download]:
        if kind == "client":
            return self.downloads.client
        if kind == "server":
            return self.downloads.server
        return None


__all__ = [
    "Catalog",
    "Download",
    "LatestPointers",
    "Library",
    "LibraryDownloads",
    "Release",
    "ReleaseDetail",
    "ReleaseDownloads",
    "ReleaseType",
    "SHA1_PATTERN",
]
