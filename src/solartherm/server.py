"""HTTP front end serving the decoded controller status.

Every request polls the frame source afresh and decodes the result; no
status is cached between requests. The blocking poll runs in a worker
thread so the event loop stays responsive.

Routes:
    ``GET /``: HTML status page.
    ``GET /status.json``: status as JSON.

Any :class:`~solartherm.exceptions.SolarthermError` becomes an HTTP 500
response carrying the error message verbatim.
"""

from __future__ import annotations

import asyncio
import html
import logging

from aiohttp import web

from .decoder import read_status
from .exceptions import SolarthermError
from .models import StatusRecord
from .transport import FrameSource

_logger = logging.getLogger(__name__)

__all__ = ["SOURCE_KEY", "create_app", "render_status_page", "run_server"]

SOURCE_KEY = web.AppKey("frame_source", FrameSource)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta http-equiv="refresh" content="30">
<title>{title}</title>
</head>
<body>
<h1>{title}</h1>
{body}
</body>
</html>
"""


def render_status_page(record: StatusRecord) -> str:
    """Render ``record`` as an HTML page, one table section per category."""
    rows: list[str] = []
    current_category: str | None = None
    for category, label, value in record.display_items():
        if category != current_category:
            rows.append(
                f'<tr><th colspan="2">{html.escape(category)}</th></tr>'
            )
            current_category = category
        rows.append(
            f"<tr><td>{html.escape(label)}</td>"
            f"<td>{html.escape(value)}</td></tr>"
        )
    body = "<table>\n" + "\n".join(rows) + "\n</table>"
    return _PAGE.format(title="Device Status", body=body)


def render_error_page(error: SolarthermError) -> str:
    body = f"<p>{html.escape(str(error))}</p>"
    return _PAGE.format(title="Internal Server Error", body=body)


async def _fetch(request: web.Request) -> StatusRecord:
    source = request.app[SOURCE_KEY]
    return await asyncio.to_thread(read_status, source)


async def handle_index(request: web.Request) -> web.Response:
    try:
        record = await _fetch(request)
    except SolarthermError as e:
        _logger.error(f"Status request failed: {e}")
        return web.Response(
            text=render_error_page(e),
            status=500,
            content_type="text/html",
        )
    return web.Response(
        text=render_status_page(record), content_type="text/html"
    )


async def handle_status_json(request: web.Request) -> web.Response:
    try:
        record = await _fetch(request)
    except SolarthermError as e:
        _logger.error(f"Status request failed: {e}")
        return web.json_response(e.to_dict(), status=500)
    return web.json_response(record.to_dict())


def create_app(source: FrameSource) -> web.Application:
    """Build the aiohttp application serving status from ``source``."""
    app = web.Application()
    app[SOURCE_KEY] = source
    app.router.add_get("/", handle_index)
    app.router.add_get("/status.json", handle_status_json)
    return app


def run_server(
    source: FrameSource,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """Serve status from ``source`` until interrupted."""
    _logger.info(
        "Serving status from %s on http://%s:%d/",
        source.describe(),
        host,
        port,
    )
    web.run_app(create_app(source), host=host, port=port, print=None)
