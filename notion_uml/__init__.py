"""
notion-uml-proxy: render PlantUML stored in Notion code blocks via Kroki or a PlantUML server.
"""

from .config import Settings
from .encoding import Base64UrlEncoder, PlantUMLEncoder, get_encoder
from .errors import NotionUMLError
from .notion_client import NotionBlockFetcher
from .pipeline import DiagramPipeline
from .render_client import RenderClient
from .response import ResponsePayload, assemble

__version__ = "0.1.0"

__all__ = [
    "Base64UrlEncoder",
    "DiagramPipeline",
    "NotionBlockFetcher",
    "NotionUMLError",
    "PlantUMLEncoder",
    "RenderClient",
    "ResponsePayload",
    "Settings",
    "assemble",
    "get_encoder",
]
