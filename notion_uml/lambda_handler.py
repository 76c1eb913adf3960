"""
AWS Lambda entry point (API Gateway proxy integration).

Settings are read on first invocation and reused for the life of the
process; a missing NOTION_ACCESS_KEY fails the invocation instead of sending
an empty credential.
"""

import logging

from .config import Settings, configure_logging

logger = logging.getLogger(__name__)

_pipeline = None


def get_pipeline():
    global _pipeline
    if _pipeline is None:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        logger.info("Loaded %r", settings)
        _pipeline = settings.build_pipeline()
    return _pipeline


def lambda_handler(event, context=None):
    event = event or {}
    method = event.get("httpMethod") or ""
    params = event.get("queryStringParameters") or {}
    return get_pipeline().handle(method, params).to_dict()
