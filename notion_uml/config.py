"""
Settings loaded once from the environment at process start.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .encoding import ENCODERS, get_encoder
from .errors import ConfigError
from .notion_client import NOTION_API_URL, NOTION_VERSION, NotionBlockFetcher
from .pipeline import DiagramPipeline
from .render_client import DEFAULT_RENDER_URLS, RenderClient
from .response import NOTION_ORIGIN

DEFAULT_BACKEND = "kroki"
DEFAULT_TIMEOUT = 30.0
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _get(environ: Mapping[str, str], key: str, default: str = "") -> str:
    return (environ.get(key) or "").strip() or default


@dataclass(frozen=True)
class Settings:
    notion_access_key: str
    notion_api_url: str = NOTION_API_URL
    notion_version: str = NOTION_VERSION
    backend: str = DEFAULT_BACKEND
    render_url: str = DEFAULT_RENDER_URLS[DEFAULT_BACKEND]
    allow_origin: str = NOTION_ORIGIN
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    def __repr__(self) -> str:
        # Keep the access key out of logs and tracebacks
        return (
            f"Settings(backend={self.backend!r}, render_url={self.render_url!r}, "
            f"notion_api_url={self.notion_api_url!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        access_key = _get(env, "NOTION_ACCESS_KEY")
        if not access_key:
            raise ConfigError("NOTION_ACCESS_KEY is not set")

        backend = _get(env, "DIAGRAM_BACKEND", DEFAULT_BACKEND).lower()
        if backend not in ENCODERS:
            raise ConfigError(
                f"Unsupported DIAGRAM_BACKEND: {backend}. Supported: {', '.join(sorted(ENCODERS))}"
            )

        raw_timeout = _get(env, "HTTP_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"HTTP_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ConfigError(f"HTTP_TIMEOUT must be positive, got {raw_timeout!r}")

        return cls(
            notion_access_key=access_key,
            notion_api_url=_get(env, "NOTION_API_URL", NOTION_API_URL),
            notion_version=_get(env, "NOTION_VERSION", NOTION_VERSION),
            backend=backend,
            render_url=_get(env, "RENDER_URL", DEFAULT_RENDER_URLS[backend]),
            allow_origin=_get(env, "ALLOW_ORIGIN", NOTION_ORIGIN),
            timeout=timeout,
            log_level=_get(env, "LOG_LEVEL", "INFO").upper(),
        )

    def build_pipeline(self) -> DiagramPipeline:
        fetcher = NotionBlockFetcher(
            self.notion_access_key,
            api_url=self.notion_api_url,
            notion_version=self.notion_version,
            timeout=self.timeout,
        )
        renderer = RenderClient(self.render_url, timeout=self.timeout)
        return DiagramPipeline(fetcher, get_encoder(self.backend), renderer, allow_origin=self.allow_origin)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
