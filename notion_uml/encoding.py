"""
Diagram source encoding for rendering-server GET URLs.

Two strategies share one compression step (zlib stream, level 9):

- ``kroki``: base64url of the compressed bytes (same format as Kroki's JS
  clients built on pako, so URLs are interchangeable).
- ``plantuml``: the PlantUML server's own 64-symbol alphabet, no padding.
"""

import base64
import binascii
import zlib

from .errors import CompressionFailure, ConfigError

# Index 0 = "0", index 63 = "_". Not the RFC 4648 ordering.
PLANTUML_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"
_PLANTUML_INDEX = {c: i for i, c in enumerate(PLANTUML_ALPHABET)}

COMPRESSION_LEVEL = 9


def encode_6bit(value: int) -> str:
    if value < 0 or value > 63:
        raise ValueError(f"6-bit value out of range: {value}")
    return PLANTUML_ALPHABET[value]


def plantuml_b64encode(data: bytes) -> str:
    """Encode bytes with the PlantUML alphabet.

    Input is consumed three bytes at a time, packed big-endian into 24 bits
    and emitted as four symbols, most significant six bits first. A trailing
    pair yields three symbols and a trailing single byte yields two, so the
    result is always ``ceil(len(data) * 8 / 6)`` symbols long.
    """
    out = []
    length = len(data)
    for i in range(0, length, 3):
        chunk = data[i:i + 3]
        n = len(chunk)
        packed = chunk[0] << 16
        if n > 1:
            packed |= chunk[1] << 8
        if n > 2:
            packed |= chunk[2]
        symbols = (
            encode_6bit((packed >> 18) & 0x3F),
            encode_6bit((packed >> 12) & 0x3F),
            encode_6bit((packed >> 6) & 0x3F),
            encode_6bit(packed & 0x3F),
        )
        out.append("".join(symbols[:n + 1]))
    return "".join(out)


def plantuml_b64decode(token: str) -> bytes:
    """Inverse of :func:`plantuml_b64encode`."""
    if len(token) % 4 == 1:
        raise ValueError(f"Invalid token length: {len(token)}")
    out = bytearray()
    for i in range(0, len(token), 4):
        group = token[i:i + 4]
        packed = 0
        for pos, symbol in enumerate(group):
            try:
                value = _PLANTUML_INDEX[symbol]
            except KeyError:
                raise ValueError(f"Invalid symbol {symbol!r} at offset {i + pos}") from None
            packed |= value << (18 - 6 * pos)
        chunk = bytes(((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF))
        out += chunk[:len(group) - 1]
    return bytes(out)


def deflate(text: str) -> bytes:
    """Compress UTF-8 text into a complete zlib stream."""
    try:
        compressor = zlib.compressobj(COMPRESSION_LEVEL)
        return compressor.compress(text.encode("utf-8")) + compressor.flush(zlib.Z_FINISH)
    except (zlib.error, UnicodeEncodeError) as e:
        raise CompressionFailure(f"Failed to compress diagram source: {e}") from e


def inflate(data: bytes) -> str:
    return zlib.decompress(data).decode("utf-8")


class PlantUMLEncoder:
    """zlib stream encoded with the PlantUML alphabet."""

    name = "plantuml"

    def encode(self, text: str) -> str:
        return plantuml_b64encode(deflate(text))

    def decode(self, token: str) -> str:
        return inflate(plantuml_b64decode(token))


class Base64UrlEncoder:
    """zlib stream encoded with URL-safe base64, as Kroki expects."""

    name = "kroki"

    def encode(self, text: str) -> str:
        return base64.urlsafe_b64encode(deflate(text)).decode("ascii")

    def decode(self, token: str) -> str:
        try:
            raw = base64.urlsafe_b64decode(token.encode("ascii"))
        except (binascii.Error, UnicodeEncodeError) as e:
            raise ValueError(f"Invalid base64url token: {e}") from e
        return inflate(raw)


ENCODERS = {
    PlantUMLEncoder.name: PlantUMLEncoder,
    Base64UrlEncoder.name: Base64UrlEncoder,
}


def get_encoder(backend: str):
    """Return the encoding strategy for a rendering backend name."""
    key = (backend or "").lower().strip()
    if key not in ENCODERS:
        raise ConfigError(
            f"Unsupported diagram backend: {backend}. "
            f"Supported: {', '.join(sorted(ENCODERS))}"
        )
    return ENCODERS[key]()
