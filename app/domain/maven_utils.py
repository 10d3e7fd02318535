import hashlib
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from xml.sax.saxutils import escape


def split_coordinate(name: str) -> Tuple[str, str, str, Optional[str]]:
    """
    Split a group:artifact:version[:classifier] coordinate.

    Anything past the fourth segment is ignored.
    """
    parts: List[str] = name.split(":")
    classifier = parts[3] if len(parts) > 3 else None
    return parts[0], parts[1], parts[2], classifier


def format_last_updated(value: datetime) -> str:
    """
    Render a timestamp the way existing consumers of maven-metadata.xml expect:
    year, zero-based month, day, hour, minute and second concatenated without
    padding or separators. Evaluated in UTC.
    """
    t = value.astimezone(timezone.utc)
    return f"{t.year}{t.month - 1}{t.day}{t.hour}{t.minute}{t.second}"


def xml_text(value: str) -> str:
    return escape(value)


def sha1_hex(data: bytes) -> str:
    """Lower-case hex SHA-1 of the exact bytes served to the client."""
    return hashlib.sha1(data).hexdigest()
