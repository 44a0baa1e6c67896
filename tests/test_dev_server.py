import contextlib

import pytest
from aiohttp import WSMsgType
from aiohttp.test_utils import TestClient, TestServer

from ruxc.dev_server import DevServer, main


@contextlib.asynccontextmanager
async def _client(dist_dir):
    server = DevServer(dist_dir=dist_dir)
    client = TestClient(TestServer(server.create_app()))
    await client.start_server()
    try:
        yield client
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_index_page(tmp_path):
    async with _client(tmp_path) as client:
        response = await client.get("/")
        assert response.status == 200
        body = await response.text()
        assert "<title>RUX Dev Server</title>" in body
        assert '<div id="root"></div>' in body


@pytest.mark.asyncio
async def test_serves_files_from_dist(tmp_path):
    (tmp_path / "generated.rs").write_text("pub fn app() {}")
    async with _client(tmp_path) as client:
        response = await client.get("/dist/generated.rs")
        assert response.status == 200
        assert await response.text() == "pub fn app() {}"


@pytest.mark.asyncio
async def test_directory_serves_its_index(tmp_path):
    (tmp_path / "index.html").write_text("<p>built</p>")
    async with _client(tmp_path) as client:
        response = await client.get("/dist/")
        assert await response.text() == "<p>built</p>"


@pytest.mark.asyncio
async def test_missing_dist_file_is_404(tmp_path):
    async with _client(tmp_path / "absent") as client:
        response = await client.get("/dist/nothing.js")
        assert response.status == 404


@pytest.mark.asyncio
async def test_cors_headers_are_permissive(tmp_path):
    async with _client(tmp_path) as client:
        response = await client.get("/", headers={"Origin": "http://localhost"})
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        preflight = await client.options(
            "/",
            headers={
                "Origin": "http://localhost",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert preflight.status == 200
        assert preflight.headers["Access-Control-Allow-Methods"] == "*"


@pytest.mark.asyncio
async def test_websocket_accepts_messages_and_closes(tmp_path):
    async with _client(tmp_path) as client:
        ws = await client.ws_connect("/ws")
        await ws.send_str("ping")
        await ws.close()
        assert ws.closed
        message = await ws.receive()
        assert message.type is WSMsgType.CLOSED


def test_default_port_and_host():
    server = DevServer()
    assert (server.host, server.port) == ("127.0.0.1", 3000)


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0