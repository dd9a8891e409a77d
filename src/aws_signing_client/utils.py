"""
Utility functions for preparing requests before they are signed
"""

import io
from datetime import datetime, timezone
from typing import Any, Optional, Union
from urllib.parse import quote, urlsplit

from requests.models import PreparedRequest


SECURE_SCHEME = "https"
AMBIGUOUS_PATH_SEQUENCE = "%2C"
RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def escape_path(path: str, encode_sep: bool = False) -> str:
    """
    Percent-encode a URL path in strict mode.

    Every byte other than the unreserved characters (letters, digits and
    ``-._~``) is escaped, including ``%`` itself, so existing escapes are
    encoded a second time.

    Args:
        path: Raw URL path
        encode_sep: Whether ``/`` is escaped as well

    Returns:
        str: Escaped path
    """
    return quote(path, safe="" if encode_sep else "/")


def normalize_url(url: str) -> str:
    """
    Force the HTTPS scheme and re-escape paths carrying an encoded comma.

    Only the scheme and, when needed, the path are rewritten; the authority,
    query and fragment are kept exactly as given, empty ones included.
    Already normalized URLs without literal reserved characters in the
    path are returned unchanged.

    Args:
        url: Absolute request URL

    Returns:
        str: Normalized URL
    """
    parts = urlsplit(url)
    _, _, rest = url.partition("//")
    tail = rest[len(parts.netloc):]
    if AMBIGUOUS_PATH_SEQUENCE in parts.path:
        tail = escape_path(parts.path, encode_sep=False) + tail[len(parts.path):]
    return f"{SECURE_SCHEME}://{parts.netloc}{tail}"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime, truncated to seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def format_rfc3339_timestamp(value: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC timestamp."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(RFC3339_FORMAT)


def parse_rfc3339_timestamp(value: str) -> datetime:
    """Parse a timestamp produced by format_rfc3339_timestamp."""
    return datetime.strptime(value, RFC3339_FORMAT).replace(tzinfo=timezone.utc)


def read_body(body: Any) -> bytes:
    """
    Read a request body completely into memory.

    Accepts the body types a PreparedRequest can carry: bytes, str, a
    file-like object or an iterable of chunks. Errors raised while reading
    propagate unchanged.

    Args:
        body: Request body

    Returns:
        bytes: Entire body
    """
    if isinstance(body, bytes):
        return body
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    if hasattr(body, "read"):
        return _to_bytes(body.read())
    return b"".join(_to_bytes(chunk) for chunk in body)


def buffer_body(request: PreparedRequest) -> Optional[io.BytesIO]:
    """
    Replace a request body with its fully buffered bytes.

    Stream bodies are sent chunked by requests, so Transfer-Encoding is
    dropped and Content-Length set to the buffered size.

    Args:
        request: Request to mutate in place

    Returns:
        BytesIO or None: Independent reader over the body, None if the
        request has no body
    """
    if request.body is None:
        return None

    data = read_body(request.body)
    request.body = data
    request.headers.pop("Transfer-Encoding", None)
    request.headers["Content-Length"] = str(len(data))
    return io.BytesIO(data)


def _to_bytes(chunk: Union[str, bytes]) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    return bytes(chunk)
