"""Helpers for data-URL style image encodings."""

from __future__ import annotations

from ..errors import MalformedEncodingError

TRANSPORT_MARKER = "base64,"
DEFAULT_MIME_TYPE = "image/jpeg"


def tag_transport_prefix(payload: str, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Prefix a bare base64 payload so it can be displayed as a data URL."""
    return f"data:{mime_type};{TRANSPORT_MARKER}{payload}"


def strip_transport_prefix(encoded: str) -> str:
    """Return the payload following the first transport marker in ``encoded``.

    Image hosts reject the ``data:<mime>;base64,`` prefix, so it has to be cut
    before upload. A string without the marker is rejected rather than passed
    through unchanged.
    """
    index = encoded.find(TRANSPORT_MARKER)
    if index < 0:
        raise MalformedEncodingError(
            f"Encoded image does not contain the {TRANSPORT_MARKER!r} marker."
        )
    return encoded[index + len(TRANSPORT_MARKER) :]
