"""
Error kinds raised by the bridge.

Upstream errors abort the request with a server error; not-found errors
become a plain 404. The HTTP mapping lives in app/main.py.
"""
from __future__ import annotations


class BridgeError(Exception):
    """Base class for every error raised by the bridge."""


class UpstreamError(BridgeError):
    """The upstream catalog host could not give us a usable document."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class UpstreamUnavailableError(UpstreamError):
    """Transport failure, timeout or non-2xx status while fetching."""


class UpstreamSchemaError(UpstreamError):
    """The response body was not JSON or did not match the expected shape."""


class NotFoundError(BridgeError):
    pass


class ReleaseNotFoundError(NotFoundError):
    def __init__(self, release_id: str):
        super().__init__(f"Release not found in catalog: {release_id}")
        self.release_id = release_id


class ArtifactNotFoundError(NotFoundError):
    def __init__(self, kind: str, release_id: str):
        super().__init__(f"Release {release_id} has no {kind} artifact")
        self.kind = kind
        self.release_id = release_id


class UnknownPathError(NotFoundError):
    pass
