"""
Maven documents synthesized from the upstream launcher documents.

Both builders are pure functions of their inputs: no clock, no set/dict
ordering that is not already fixed by the upstream JSON. The POM is hashed for
its .sha1 companion, so identical input must give identical bytes.
"""
from __future__ import annotations

from typing import List

from app.data.models import BridgeConfig
from app.domain.maven_utils import format_last_updated, split_coordinate, xml_text
from app.domain.models import Catalog, Library, ReleaseDetail


XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

POM_PROJECT_OPEN = (
    '<project xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 '
    'https://maven.apache.org/xsd/maven-4.0.0.xsd" '
    'xmlns="http://maven.apache.org/POM/4.0.0" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">\n'
)


# ---------------------------------------------------------------------------
# maven-metadata.xml
# ---------------------------------------------------------------------------


def listed_release_ids(catalog: Catalog, kind: str, config: BridgeConfig) -> List[str]:
    """
    Release ids to advertise for an artifact kind, in catalog order (newest
    first).

    The server listing stops before the first release that predates server
    jars. If a legacy cutoff is configured, the listing also stops there.
    """
    ids: List[str] = []
    for release in catalog.versions:
        if (
            config.listing_cutoff_release_id is not None
            and release.id == config.listing_cutoff_release_id
        ):
            break
        if kind == "server" and release.id == config.server_listing_floor_release_id:
            break
        ids.append(release.id)
    return ids


def build_maven_metadata(catalog: Catalog, kind: str, config: BridgeConfig) -> str:
    lines = [
        "<metadata>",
        f"\t<groupId>{xml_text(config.group_id)}</groupId>",
        f"\t<artifactId>{xml_text(kind)}</artifactId>",
        "\t<versioning>",
        f"\t\t<latest>{xml_text(catalog.latest.snapshot)}</latest>",
        f"\t\t<release>{xml_text(catalog.latest.release)}</release>",
        "\t\t<versions>",
    ]
    for release_id in listed_release_ids(catalog, kind, config):
        lines.append(f"\t\t\t<version>{xml_text(release_id)}</version>")
    lines.append("\t\t</versions>")

    last_updated = format_last_updated(catalog.latest_release.release_time)
    lines.append(f"\t\t<lastUpdated>{last_updated}</lastUpdated>")
    lines.append("\t</versioning>")
    lines.append("</metadata>")
    return XML_DECLARATION + "\n".join(lines)


# ---------------------------------------------------------------------------
# POM
# ---------------------------------------------------------------------------


def is_broken_library(library: Library, config: BridgeConfig) -> bool:
    """
    Some releases list a broken LWJGL nightly next to the fixed build of the
    same coordinate. Only the fixed one may end up in the POM.
    """
    _, _, version, _ = split_coordinate(library.name)
    return any(marker in version for marker in config.broken_version_markers)


def library_classifiers(library: Library) -> List[str]:
    """
    Classifiers of a library. A classifier map (newer detail documents) wins
    over the fourth coordinate segment; the two are never combined.
    """
    if library.downloads.classifiers is not None:
        return list(library.downloads.classifiers.keys())
    _, _, _, classifier = split_coordinate(library.name)
    if classifier is not None:
        return [classifier]
    return []


def _dependency_xml(library: Library) -> str:
    group, artifact, version, _ = split_coordinate(library.name)
    xml = (
        "\t\t<dependency>\n"
        f"\t\t\t<groupId>{xml_text(group)}</groupId>\n"
        f"\t\t\t<artifactId>{xml_text(artifact)}</artifactId>\n"
        f"\t\t\t<version>{xml_text(version)}</version>\n"
        "\t\t\t<scope>runtime</scope>\n"
    )
    for classifier in library_classifiers(library):
        xml += f"\t\t\t<classifier>{xml_text(classifier)}</classifier>\n"
    xml += "\t\t</dependency>\n"
    return xml


def build_pom(detail: ReleaseDetail, kind: str, config: BridgeConfig) -> str:
    xml = XML_DECLARATION + POM_PROJECT_OPEN
    xml += (
        "\t<modelVersion>4.0.0</modelVersion>\n"
        f"\t<groupId>{xml_text(config.group_id)}</groupId>\n"
        f"\t<artifactId>{xml_text(kind)}</artifactId>\n"
        f"\t<version>{xml_text(detail.id)}</version>\n"
        "\t<dependencies>\n"
    )
    for library in detail.libraries:
        if is_broken_library(library, config):
            continue
        xml += _dependency_xml(library)
    xml += "\t</dependencies>\n</project>\n"
    return xml
