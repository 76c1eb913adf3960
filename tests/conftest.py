"""Pytest configuration: project root on sys.path and shared HTTP fakes."""
import sys
from pathlib import Path

import httpx
import pytest

_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))


def code_block(content):
    """Minimal Notion code block object carrying one text run."""
    return {
        "object": "block",
        "type": "code",
        "code": {
            "language": "plain text",
            "rich_text": [{"type": "text", "text": {"content": content, "link": None}}],
        },
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests = []

        def _record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def notion_block():
    return code_block
