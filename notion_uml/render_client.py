"""
Render client: fetch a rendered diagram from Kroki or a PlantUML server via GET.
"""

import logging
from typing import Optional

import httpx

from .errors import RenderReadError, RenderStatusError, RenderUnavailable, ValidationError

logger = logging.getLogger(__name__)

# Output formats served to the caller
SUPPORTED_FORMATS = ("png", "svg")

KROKI_URL = "https://kroki.io/plantuml"
PLANTUML_URL = "https://www.plantuml.com/plantuml"

DEFAULT_RENDER_URLS = {
    "kroki": KROKI_URL,
    "plantuml": PLANTUML_URL,
}


def validate_format(output_format: str) -> str:
    """Return the format if it is one we serve, else raise ValidationError."""
    if output_format not in SUPPORTED_FORMATS:
        raise ValidationError(
            f"Unsupported format: {output_format!r}. Supported: {', '.join(SUPPORTED_FORMATS)}"
        )
    return output_format


class RenderClient:
    """GET ``<base_url>/<format>/<token>`` and return the body bytes.

    Non-2xx responses raise RenderStatusError so an error page is never
    passed along as an image.
    """

    def __init__(
        self,
        base_url: str = KROKI_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def get_render_url(self, token: str, output_format: str) -> str:
        """Build the shareable GET URL for an encoded diagram."""
        validate_format(output_format)
        return f"{self.base_url}/{output_format}/{token}"

    def fetch_image(self, token: str, output_format: str) -> bytes:
        url = self.get_render_url(token, output_format)
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            try:
                with client.stream("GET", url) as r:
                    try:
                        body = r.read()
                    except httpx.HTTPError as e:
                        raise RenderReadError(f"Failed to read render response: {e}") from e
                    status_code = r.status_code
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise RenderUnavailable(f"Render request failed: {e}") from e
        if not r.is_success:
            raise RenderStatusError(
                status_code,
                f"Render HTTP {status_code}: {body[:200].decode('utf-8', errors='replace')}",
            )
        logger.debug("Fetched %d bytes of %s from %s", len(body), output_format, self.base_url)
        return body
