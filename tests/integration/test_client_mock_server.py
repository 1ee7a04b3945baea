"""Round trips through the default transport against a local HTTP server."""

import http.server
import json
import socket
import socketserver
import threading

import pytest

from fgcclient import ErrorCode, FGCClient


class MockHandler(http.server.BaseHTTPRequestHandler):
    def _reply(self, status: int, payload: dict) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("X-Echo-Connection", self.headers.get("Connection", ""))
        self.send_header("X-Test", "a:b:c")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self) -> None:  # noqa: N802 - required by BaseHTTPRequestHandler
        if self.path == "/missing":
            self._reply(404, {"error": "not found"})
            return
        self._reply(200, {"method": "GET", "path": self.path})

    def do_POST(self) -> None:  # noqa: N802
        length = int(self.headers.get("Content-Length", "0"))
        received = self.rfile.read(length).decode("utf-8")
        self._reply(201, {"method": "POST", "received": json.loads(received)})

    def do_DELETE(self) -> None:  # noqa: N802
        self._reply(200, {"method": "DELETE", "length": self.headers.get("Content-Length")})

    def log_message(self, format: str, *args) -> None:  # noqa: N802
        return


@pytest.fixture(scope="module")
def mock_server() -> str:
    server = socketserver.TCPServer(("127.0.0.1", 0), MockHandler)
    server.allow_reuse_address = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()


@pytest.fixture
def closed_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.mark.integration
def test_get_round_trip(mock_server) -> None:
    client = FGCClient(mock_server + "/items").set_timeout(5).set_headers({"Accept": "application/json"})

    client.get()

    assert client.get_error_code() is None
    assert client.get_http_status_code() == 200
    assert client.get_parsed_response() == {"method": "GET", "path": "/items"}
    headers = client.get_response_headers()
    assert headers["x-test"] == "a:b:c"
    assert headers["x-echo-connection"] == "close"


@pytest.mark.integration
def test_post_json_payload(mock_server) -> None:
    client = FGCClient(mock_server)

    client.post(mock_server + "/items", {"name": "widget"})

    assert client.get_http_status_code() == 201
    assert client.get_parsed_response()["received"] == {"name": "widget"}


@pytest.mark.integration
def test_http_error_is_not_a_transport_error(mock_server) -> None:
    client = FGCClient(mock_server + "/missing")

    client.get()

    assert client.get_http_status_code() == 404
    assert client.get_error_code() is None
    assert client.get_parsed_response() == {"error": "not found"}


@pytest.mark.integration
def test_delete_sends_no_body(mock_server) -> None:
    client = FGCClient(mock_server + "/items/1")

    client.delete(None, {"ignored": True})

    assert client.get_parsed_response()["method"] == "DELETE"
    assert client.get_parsed_response()["length"] in (None, "0")


@pytest.mark.integration
def test_refused_connection_is_captured(closed_port) -> None:
    client = FGCClient(f"http://127.0.0.1:{closed_port}/")

    client.set_timeout(2).get()

    assert client.get_error_code() == ErrorCode.COULDNT_CONNECT
    assert client.get_error_message()
    assert client.get_http_status_code() == 0


@pytest.mark.integration
def test_non_latin1_header_is_captured_as_transport_error(mock_server) -> None:
    client = FGCClient(mock_server + "/items").set_headers({"X-Name": "日本"})

    assert client.get() is client

    assert client.get_error_code() == ErrorCode.UNKNOWN
    assert "latin-1" in client.get_error_message()
    assert client.get_http_status_code() == 0
    assert client.get_raw_response() is None
