"""Development HTTP server with a hot-reload WebSocket endpoint."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Optional, Sequence

from aiohttp import WSMsgType, web

INDEX_HTML = """
<!DOCTYPE html>
<html>
<head>
    <title>RUX Dev Server</title>
    <meta charset="utf-8">
</head>
<body>
    <div id="root"></div>
    <script type="module">
        console.log('RUX dev server loaded');
    </script>
</body>
</html>
    """

_Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def _permissive_cors(request: web.Request, handler: _Handler) -> web.StreamResponse:
    if request.method == "OPTIONS" and "Access-Control-Request-Method" in request.headers:
        return web.Response(
            status=200,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "*",
                "Access-Control-Allow-Headers": "*",
            },
        )
    try:
        response = await handler(request)
    except web.HTTPException as exc:
        exc.headers["Access-Control-Allow-Origin"] = "*"
        raise
    if not response.prepared:
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Expose-Headers"] = "*"
    return response


class DevServer:
    """Serves the index page, the build output and a WebSocket for reloads."""

    def __init__(
        self, port: int = 3000, dist_dir: str | Path = "dist", host: str = "127.0.0.1"
    ) -> None:
        self.port = port
        self.host = host
        self.dist_dir = Path(dist_dir)

    def create_app(self) -> web.Application:
        """Build the aiohttp application with all routes."""
        app = web.Application(middlewares=[_permissive_cors])
        app.router.add_get("/", self._index)
        app.router.add_get("/ws", self._websocket)
        app.router.add_get("/dist/{path:.*}", self._dist_file)
        return app

    async def start(self) -> None:
        """Run the server until cancelled."""
        runner = web.AppRunner(self.create_app())
        await runner.setup()
        try:
            site = web.TCPSite(runner, self.host, self.port)
            await site.start()
            print(f"🚀 RUX dev server running on http://{self.host}:{self.port}")
            await asyncio.Event().wait()
        finally:
            await runner.cleanup()

    async def _index(self, request: web.Request) -> web.Response:
        return web.Response(text=INDEX_HTML, content_type="text/html")

    async def _websocket(self, request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        async for message in ws:
            if message.type is WSMsgType.ERROR:
                break
        return ws

    async def _dist_file(self, request: web.Request) -> web.StreamResponse:
        root = self.dist_dir.resolve()
        relative = request.match_info["path"]
        target = (root / relative).resolve()
        if target != root and root not in target.parents:
            raise web.HTTPNotFound()
        if target.is_dir():
            target = target / "index.html"
        if not target.is_file():
            raise web.HTTPNotFound()
        return web.FileResponse(target)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="rux-dev", description="RUX development server")
    parser.add_argument("-p", "--port", type=int, default=3000)
    parser.add_argument("--dist", default="dist", help="directory served under /dist")
    args = parser.parse_args(argv)
    server = DevServer(args.port, args.dist)
    try:
        asyncio.run(server.start())
    except KeyboardInterrupt:
        pass
    return 0