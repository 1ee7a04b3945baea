import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fgcclient.transport import TransportResult  # noqa: E402


class RecordingTransport:
    """Transport double that records calls and replays a canned result."""

    def __init__(self, result=None, error=None):
        self.result = result or TransportResult(
            body=b'{"ok": true}',
            header_lines=["HTTP/1.0 200 OK", "Content-Type: application/json"],
        )
        self.error = error
        self.calls = []

    def __call__(self, url, options):
        self.calls.append((url, options.as_dict()))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    for name in ("FGC_BASE_URL", "FGC_TIMEOUT", "FGC_USER_AGENT"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def recording_transport_cls():
    return RecordingTransport
