"""HTTP entry point serving static pages, diagnostics and the signalling websocket."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import ssl
from pathlib import Path

from aiohttp import web

from .server import Server

log = logging.getLogger(__name__)


def build_app(server: Server, static_dir) -> web.Application:
    """Create the web application; the hub starts with the application."""
    static_root = Path(static_dir).resolve()

    async def hub_context(app):
        task = server.run()
        yield
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def admin(request):
        diagnostics = server.get_diagnostics()
        return web.json_response({"Lobbies": diagnostics.lobbies, "Peers": diagnostics.peers})

    def serve_file(path: Path):
        if not path.is_file():
            raise web.HTTPNotFound()
        return web.FileResponse(path)

    async def test_page(request):
        return serve_file(Path("test.html"))

    async def websocket(request):
        ws = web.WebSocketResponse(autoping=False)
        await ws.prepare(request)
        await server.init_peer(ws)
        return ws

    async def static(request):
        target = (static_root / request.match_info["tail"]).resolve()
        if target != static_root and static_root not in target.parents:
            raise web.HTTPNotFound()
        return serve_file(target / "index.html" if target.is_dir() else target)

    app = web.Application()
    app.cleanup_ctx.append(hub_context)
    app.router.add_get("/admin", admin)
    app.router.add_get("/test", test_page)
    app.router.add_get("/ws", websocket)
    app.router.add_get("/{tail:.*}", static)
    return app


def main(argv=None) -> int:
    """Run the signalling server until interrupted."""
    parser = argparse.ArgumentParser(prog="signalws")
    parser.add_argument("-port", "--port", default=":9000", help="http port")
    parser.add_argument("-cert", "--cert", default="", help="certificate name")
    parser.add_argument("-static", "--static", default="static", help="directory of static pages")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    is_https = bool(args.cert)
    log.info("Starting server on %s://localhost%s", "https" if is_https else "http", args.port)

    try:
        host, _, port_text = args.port.rpartition(":")
        port = int(port_text)
        if not 0 <= port <= 65535:
            raise ValueError(f"address {args.port}: invalid port")
        ssl_context = None
        if is_https:
            ssl_context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
            ssl_context.load_cert_chain(args.cert + ".crt", args.cert + ".key")
        web.run_app(
            build_app(Server(), args.static),
            host=host or None,
            port=port,
            ssl_context=ssl_context,
            print=None,
        )
    except (ValueError, OSError) as exc:
        log.critical("ListenAndServe: %s", exc)
        raise SystemExit(1)
    return 0