"""Path splitting and strict percent-decoding of path components."""

import re
from urllib.parse import unquote_to_bytes

from pathgate._errors import MalformedPathError

# A '%' that does not introduce two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def split_path(path: str) -> tuple[str, str]:
    """Split *path* at its first ``/``.

    ``"users/42/edit"`` -> ``("users", "42/edit")``
    ``"users"``         -> ``("users", "")``
    ``""``              -> ``("", "")``

    """
    segment, _, remaining = path.partition("/")
    return segment, remaining


def decode_segment(segment: str) -> str:
    """Percent-decode one raw path component.

    Decodes ``%XX`` escapes and interprets the resulting bytes as UTF-8.
    ``+`` is left alone (this is path decoding, not form decoding).

    Raises:
        MalformedPathError: On a ``%`` without two hex digits after it, or
            on escapes that do not form valid UTF-8.

    """
    if "%" not in segment:
        return segment

    bad = _BAD_ESCAPE.search(segment)
    if bad is not None:
        msg = f"invalid escape at offset {bad.start()}"
        raise MalformedPathError(segment, msg)

    try:
        return unquote_to_bytes(segment).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedPathError(segment, "escapes do not form valid UTF-8") from exc
