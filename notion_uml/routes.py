"""
aiohttp routes: GET /diagram?blockId=...&filetype=png|svg (also served at /).

The pipeline is blocking, so each request runs it in the default executor.
"""

import asyncio
import logging

from aiohttp import web

from .pipeline import DiagramPipeline

logger = logging.getLogger(__name__)

PIPELINE_KEY = web.AppKey("pipeline", DiagramPipeline)
ROUTE_PATHS = ("/", "/diagram")


def _to_web_response(payload) -> web.Response:
    headers = {k: v for k, v in payload.headers.items() if k.lower() != "content-type"}
    content_type = (payload.headers.get("Content-Type") or "application/octet-stream").split(";")[0].strip()
    return web.Response(
        status=payload.status_code,
        body=payload.body_bytes(),
        content_type=content_type,
        headers=headers,
    )


async def _diagram_handler(request):
    pipeline = request.app[PIPELINE_KEY]
    params = {k: request.query.get(k) for k in ("filetype", "blockId") if request.query.get(k) is not None}
    loop = asyncio.get_running_loop()
    payload = await loop.run_in_executor(None, pipeline.handle, request.method, params)
    return _to_web_response(payload)


def register_routes(app: web.Application, pipeline: DiagramPipeline) -> None:
    """Attach the diagram route for every method; non-GET gets 400 from the pipeline."""
    app[PIPELINE_KEY] = pipeline
    for path in ROUTE_PATHS:
        app.router.add_route("*", path, _diagram_handler)


def create_app(pipeline: DiagramPipeline) -> web.Application:
    app = web.Application()
    register_routes(app, pipeline)
    return app


def serve(pipeline: DiagramPipeline, host: str = "127.0.0.1", port: int = 8080) -> None:
    logger.info("Serving diagrams on http://%s:%d/diagram", host, port)
    web.run_app(create_app(pipeline), host=host, port=port, print=None)
