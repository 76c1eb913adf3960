"""
Notion client: read the diagram source stored in a code block.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from .errors import MalformedUpstreamResponse, UpstreamStatusError, UpstreamUnavailable

logger = logging.getLogger(__name__)

NOTION_API_URL = "https://api.notion.com/v1/blocks/"
NOTION_VERSION = "2022-02-22"


def extract_code_text(payload: Any) -> str:
    """Return ``code.rich_text[0].text.content`` from a block object.

    Every step is type-checked; any deviation raises MalformedUpstreamResponse.
    """
    if not isinstance(payload, dict):
        raise MalformedUpstreamResponse("Block response is not a JSON object")
    code = payload.get("code")
    if not isinstance(code, dict):
        raise MalformedUpstreamResponse("Block has no 'code' object")
    rich_text = code.get("rich_text")
    if not isinstance(rich_text, list) or not rich_text:
        raise MalformedUpstreamResponse("Code block has no rich_text runs")
    first = rich_text[0]
    if not isinstance(first, dict):
        raise MalformedUpstreamResponse("First rich_text run is not an object")
    text = first.get("text")
    if not isinstance(text, dict):
        raise MalformedUpstreamResponse("First rich_text run has no 'text' object")
    content = text.get("content")
    if not isinstance(content, str):
        raise MalformedUpstreamResponse("First rich_text run has no string 'content'")
    return content


class NotionBlockFetcher:
    """Fetch a block from the Notion API and extract its code text.

    The access key is passed in explicitly; nothing is read from the
    environment here.
    """

    def __init__(
        self,
        access_key: str,
        api_url: str = NOTION_API_URL,
        notion_version: str = NOTION_VERSION,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.notion_version = notion_version
        self.timeout = timeout
        self._access_key = access_key
        self._transport = transport

    def block_url(self, block_id: str) -> str:
        return f"{self.api_url}/{quote(block_id, safe='')}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_key}",
            "Notion-Version": self.notion_version,
            "Accept": "application/json",
        }

    def fetch_text(self, block_id: str) -> str:
        url = self.block_url(block_id)
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                r = client.get(url, headers=self._headers())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UpstreamUnavailable(f"Notion request failed: {e}") from e
        if r.status_code != httpx.codes.OK:
            raise UpstreamStatusError(
                r.status_code,
                f"Notion HTTP status: got {r.status_code}, expected 200: {r.text[:200]}",
            )
        try:
            payload = r.json()
        except ValueError as e:
            raise MalformedUpstreamResponse(f"Notion response is not valid JSON: {e}") from e
        text = extract_code_text(payload)
        logger.debug("Fetched %d characters of diagram source from block %s", len(text), block_id)
        return text
