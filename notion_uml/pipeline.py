"""
Request pipeline: validate, fetch Notion text, encode, render, respond.

Each stage runs to completion before the next starts. The first failure ends
the request with a generic message; details only go to the log.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import CompressionFailure, FetchError, RenderError, ValidationError
from .render_client import SUPPORTED_FORMATS
from .response import NOTION_ORIGIN, ResponsePayload, assemble, bad_request, server_error

logger = logging.getLogger(__name__)

FETCH_FAILED_BODY = "Failed to fetch diagram source"
RENDER_FAILED_BODY = "Failed to render diagram"


@dataclass(frozen=True)
class DiagramRequest:
    block_id: str
    output_format: str


def validate_request(method: str, params: Optional[Mapping[str, str]]) -> DiagramRequest:
    """Check method and query parameters; raise ValidationError when unusable."""
    if method != "GET":
        raise ValidationError(f"Method not allowed: {method}")
    params = params or {}
    output_format = params.get("filetype")
    if not output_format or output_format not in SUPPORTED_FORMATS:
        raise ValidationError(f"Invalid filetype: {output_format!r}")
    block_id = params.get("blockId")
    if not isinstance(block_id, str) or not block_id.strip():
        raise ValidationError("Missing blockId")
    return DiagramRequest(block_id=block_id.strip(), output_format=output_format)


class DiagramPipeline:
    """Serve one diagram request from a Notion block reference."""

    def __init__(self, fetcher, encoder, renderer, allow_origin: str = NOTION_ORIGIN):
        self.fetcher = fetcher
        self.encoder = encoder
        self.renderer = renderer
        self.allow_origin = allow_origin

    def handle(self, method: str, params: Optional[Mapping[str, str]]) -> ResponsePayload:
        try:
            req = validate_request(method, params)
        except ValidationError as e:
            logger.info("Rejected request: %s", e)
            return bad_request()

        try:
            source = self.fetcher.fetch_text(req.block_id)
        except FetchError as e:
            logger.warning("Fetching block %s failed: %s", req.block_id, e)
            return server_error(FETCH_FAILED_BODY)

        try:
            token = self.encoder.encode(source)
            image = self.renderer.fetch_image(token, req.output_format)
        except (CompressionFailure, RenderError) as e:
            logger.warning("Rendering block %s as %s failed: %s", req.block_id, req.output_format, e)
            return server_error(RENDER_FAILED_BODY)

        return assemble(image, req.output_format, allow_origin=self.allow_origin)
