"""
Fixtures for framework unit tests: a fake clock, a fake page and a poller
wired to both.
"""

import pytest

from bookstore_e2e.common.config_loader import ConfigLoader
from bookstore_e2e.ui_testing.framework.polling import PollingAssertion
from bookstore_e2e.unit.fakes import FakeClock, FakePage


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path_factory):
    """Point configuration at an empty file so YAML and env do not leak in."""
    for name in ("UI_BASE_URL", "UI_USERNAME", "UI_PASSWORD", "POLLING_TIMEOUT",
                 "POLLING_INTERVAL", "POLLING_DETAIL_TIMEOUT", "SCREENSHOTS_DIR"):
        monkeypatch.delenv(name, raising=False)
    config_path = tmp_path_factory.mktemp("config") / "config.yaml"
    config_path.write_text("", encoding="utf-8")
    ConfigLoader.reset()
    ConfigLoader(config_path=config_path)
    yield
    ConfigLoader.reset()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_page(clock: FakeClock) -> FakePage:
    return FakePage(clock)


@pytest.fixture
def poller(clock: FakeClock) -> PollingAssertion:
    return PollingAssertion(timeout=4000, interval=100, clock=clock.monotonic, sleep=clock.sleep)
