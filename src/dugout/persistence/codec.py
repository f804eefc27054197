from __future__ import annotations

import base64
import json
import math
import re
import zlib
from typing import Any

from dugout.core.errors import StateCodecError

SERIALIZATION_VERSION = 1
COMPRESSION_THRESHOLD = 200
DEFAULT_URL_LIMIT = 2000
_TOKEN_PATTERN = re.compile(r"^v(\d+)=(.+)~h=([0-9a-fA-F]+)$")
_TAB_PATTERN = re.compile(r"&tab=([^~]+)")
_ZLIB_SECOND_BYTES = {0x01, 0x5E, 0x9C, 0xDA}


def encode_state(state: dict[str, Any]) -> str:
    """Pack a state payload into a ``#v1=<data>~h=<crc32>`` URL fragment."""
    try:
        serialized = _serialize(state)
    except (TypeError, ValueError) as exc:
        raise StateCodecError(f"Failed to encode state: {exc}") from exc
    packed = zlib.compress(serialized) if len(serialized) >= COMPRESSION_THRESHOLD else serialized
    checksum = zlib.crc32(packed) & 0xFFFFFFFF
    return f"#v{SERIALIZATION_VERSION}={_b64url_encode(packed)}~h={checksum:x}"


def decode_state(token: str) -> dict[str, Any]:
    fragment, _tab = parse_share_fragment(token)
    match = _TOKEN_PATTERN.match(fragment)
    if match is None:
        raise StateCodecError("Failed to decode state: invalid token format, expected #v1=<data>~h=<checksum>")
    version = int(match.group(1))
    if version != SERIALIZATION_VERSION:
        raise StateCodecError(
            f"Failed to decode state: unsupported version {version}, this decoder supports {SERIALIZATION_VERSION}"
        )

    try:
        packed = _b64url_decode(match.group(2))
    except ValueError as exc:
        raise StateCodecError(f"Failed to decode state: bad base64url payload: {exc}") from exc

    expected = int(match.group(3), 16)
    actual = zlib.crc32(packed) & 0xFFFFFFFF
    if expected != actual:
        raise StateCodecError(
            f"Failed to decode state: checksum mismatch, expected {expected:x}, got {actual:x}"
        )

    serialized = _maybe_inflate(packed)
    try:
        envelope = json.loads(serialized.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise StateCodecError(f"Failed to decode state: payload is not valid JSON: {exc}") from exc
    if not isinstance(envelope, dict) or "data" not in envelope:
        raise StateCodecError("Failed to decode state: decoded payload is not an envelope object")
    if envelope.get("v") != SERIALIZATION_VERSION:
        raise StateCodecError(
            f"Failed to decode state: envelope version {envelope.get('v')} does not match {SERIALIZATION_VERSION}"
        )
    return envelope["data"]


def parse_share_fragment(token: str) -> tuple[str, str | None]:
    """Strip the leading ``#`` and any ``&tab=<name>`` segment; return the bare token and tab."""
    fragment = token[1:] if token.startswith("#") else token
    tabs = _TAB_PATTERN.findall(fragment)
    tab = tabs[-1] if tabs else None
    return _TAB_PATTERN.sub("", fragment), tab


def with_tab(token: str, tab: str) -> str:
    head, checksum = token.split("~", 1)
    return f"{head}&tab={tab}~{checksum}"


def estimate_size(state: dict[str, Any]) -> int:
    serialized = _serialize(state)
    ratio = 1.0 if len(serialized) < COMPRESSION_THRESHOLD else 0.3
    compressed = math.ceil(len(serialized) * ratio)
    return math.ceil(compressed * 4 / 3) + 20


def is_url_too_long(url: str, max_length: int = DEFAULT_URL_LIMIT) -> bool:
    return len(url) > max_length


def _serialize(state: dict[str, Any]) -> bytes:
    envelope = {"v": SERIALIZATION_VERSION, "data": state}
    return json.dumps(envelope, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _maybe_inflate(data: bytes) -> bytes:
    if len(data) < 2 or data[0] != 0x78 or data[1] not in _ZLIB_SECOND_BYTES:
        return data
    try:
        return zlib.decompress(data)
    except zlib.error:
        return data


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(text: str) -> bytes:
    padded = text + "=" * (-len(text) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))
