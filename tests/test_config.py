from __future__ import annotations

import pytest

from fgcclient import __version__
from fgcclient.config import ClientSettings, load_settings


def test_load_settings_defaults() -> None:
    settings = load_settings({})

    assert settings == ClientSettings(base_url=None, timeout=30, user_agent=f"fgcclient/{__version__}")


def test_load_settings_reads_environment() -> None:
    settings = load_settings(
        {"FGC_BASE_URL": " http://api.test ", "FGC_TIMEOUT": "12", "FGC_USER_AGENT": "probe/2"}
    )

    assert settings.base_url == "http://api.test"
    assert settings.timeout == 12
    assert settings.user_agent == "probe/2"


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_load_settings_rejects_bad_timeouts(value) -> None:
    with pytest.raises(ValueError):
        load_settings({"FGC_TIMEOUT": value})
