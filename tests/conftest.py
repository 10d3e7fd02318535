"""
Shared fixtures for the bridge tests.

Payload builders return plain JSON-shaped dicts, the way the upstream host
serves them; tests validate them into models where they need models.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from app.data.models import BridgeConfig
from app.domain.models import Catalog, ReleaseDetail

META_HOST = "https://piston-meta.example.test"
DATA_HOST = "https://piston-data.example.test"

SHA1_A = "a" * 40
SHA1_B = "0123456789abcdef0123456789abcdef01234567"


def release_payload(
    release_id: str,
    release_type: str = "release",
    release_time: str = "2024-06-13T08:24:03+00:00",
) -> Dict[str, Any]:
    return {
        "id": release_id,
        "type": release_type,
        "url": f"{META_HOST}/v1/packages/{SHA1_A}/{release_id}.json",
        "time": "2024-06-13T08:32:38+00:00",
        "releaseTime": release_time,
        "sha1": SHA1_A,
        "complianceLevel": 1,
    }


def catalog_payload(
    versions: List[Dict[str, Any]],
    latest_release: Optional[str] = None,
    latest_snapshot: Optional[str] = None,
) -> Dict[str, Any]:
    first = versions[0]["id"]
    return {
        "latest": {
            "release": latest_release or first,
            "snapshot": latest_snapshot or first,
        },
        "versions": versions,
    }


def download_payload(name: str, size: int = 1234, sha1: str = SHA1_B) -> Dict[str, Any]:
    return {
        "size": size,
        "url": f"{DATA_HOST}/v1/objects/{sha1}/{name}",
        "sha1": sha1,
    }


def library_payload(name: str, classifiers: Optional[List[str]] = None) -> Dict[str, Any]:
    downloads: Dict[str, Any] = {"artifact": download_payload(name.replace(":", "-") + ".jar")}
    if classifiers is not None:
        downloads["classifiers"] = {
            c: download_payload(f"{name.replace(':', '-')}-{c}.jar") for c in classifiers
        }
    return {"name": name, "downloads": downloads}


def detail_payload(
    release_id: str,
    libraries: Optional[List[Dict[str, Any]]] = None,
    with_server: bool = True,
) -> Dict[str, Any]:
    downloads: Dict[str, Any] = {"client": download_payload("client.jar")}
    if with_server:
        downloads["server"] = download_payload("server.jar", sha1=SHA1_A)
    return {
        "id": release_id,
        "downloads": downloads,
        "libraries": libraries or [],
    }


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def config() -> BridgeConfig:
    return BridgeConfig()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog() -> Catalog:
    """Newest first, like the real catalog: a snapshot, two releases, then 1.2.4 and older."""
    return Catalog.model_validate(
        catalog_payload(
            [
                release_payload("24w14a", "snapshot", "2024-04-03T12:00:00+00:00"),
                release_payload("1.1", release_time="2023-12-25T17:05:09+00:00"),
                release_payload("1.0"),
                release_payload("1.2.4", release_time="2012-03-22T00:00:00+00:00"),
                release_payload("b1.7.3", "old_beta", "2011-07-08T00:00:00+00:00"),
            ],
            latest_release="1.1",
            latest_snapshot="24w14a",
        )
    )


@pytest.fixture
def detail() -> ReleaseDetail:
    return ReleaseDetail.model_validate(
        detail_payload(
            "1.1",
            [
                library_payload("com.mojang:brigadier:1.2.9"),
                library_payload("org.lwjgl:lwjgl:3.3.3:natives-linux"),
                library_payload("org.lwjgl.lwjgl:lwjgl-platform:2.9.0", classifiers=["natives-linux", "natives-osx"]),
            ],
        )
    )
