"""
Response framing: status, headers and body in an API-Gateway-compatible envelope.
"""

import base64
from dataclasses import dataclass, field

from .render_client import validate_format

NOTION_ORIGIN = "https://www.notion.so"
CACHE_CONTROL = "no-store, no-cache, must-revalidate, max-age=0"

MIME_TYPES = {"png": "image/png", "svg": "image/svg+xml"}

BAD_REQUEST_BODY = "Bad Request"


@dataclass
class ResponsePayload:
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    is_base64_encoded: bool = False

    @property
    def transport_encoding(self) -> str:
        return "binary" if self.is_base64_encoded else "text"

    def to_dict(self) -> dict:
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
            "isBase64Encoded": self.is_base64_encoded,
        }

    def body_bytes(self) -> bytes:
        """Raw bytes as they should go over a plain HTTP connection."""
        if self.is_base64_encoded:
            return base64.b64decode(self.body)
        return self.body.encode("utf-8")


def assemble(image: bytes, output_format: str, allow_origin: str = NOTION_ORIGIN) -> ResponsePayload:
    """Frame rendered image bytes: PNG as base64 text, SVG verbatim."""
    validate_format(output_format)
    headers = {
        "Cache-Control": CACHE_CONTROL,
        "Access-Control-Allow-Origin": allow_origin,
        "Content-Type": MIME_TYPES[output_format],
    }
    if output_format == "png":
        return ResponsePayload(
            status_code=200,
            headers=headers,
            body=base64.b64encode(image).decode("ascii"),
            is_base64_encoded=True,
        )
    return ResponsePayload(
        status_code=200,
        headers=headers,
        body=image.decode("utf-8", errors="replace"),
        is_base64_encoded=False,
    )


def _text_response(status_code: int, message: str) -> ResponsePayload:
    return ResponsePayload(
        status_code=status_code,
        headers={"Content-Type": "text/plain; charset=utf-8"},
        body=message,
    )


def bad_request() -> ResponsePayload:
    return _text_response(400, BAD_REQUEST_BODY)


def server_error(message: str) -> ResponsePayload:
    return _text_response(500, message)
