"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest
import yaml

src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from grantflow.config.settings import ConfigStore, ENV_OVERRIDES  # noqa: E402
from grantflow.schemas.flow import (  # noqa: E402
    FlowRequest,
    LaunchResult,
    OutcomeNotification,
    PromptVariant,
    SettingsScreen,
)
from grantflow.services.flow.controller import PermissionFlowController  # noqa: E402
from grantflow.services.flow.protocol import (  # noqa: E402
    CapabilityStatusProvider,
    ConsentUI,
    DependentService,
    SettingsNavigatorProtocol,
)


def pytest_configure(config):
    """Register markers."""
    config.addinivalue_line("markers", "cli: command-line entry point tests")
    config.addinivalue_line("markers", "platform: platform integration tests")


def pytest_collection_modifyitems(config, items):
    """
    Modify test items to add helpful markers.
    """
    for item in items:
        if "cli" in item.nodeid.lower():
            item.add_marker("cli")
        if "navigator" in item.nodeid.lower():
            item.add_marker("platform")


class FakeStatusProvider(CapabilityStatusProvider):
    """Returns queued statuses in order, repeating the last one."""

    def __init__(self, *statuses: bool):
        self.statuses = list(statuses) or [False]
        self.calls = 0

    def is_active(self) -> bool:
        index = min(self.calls, len(self.statuses) - 1)
        self.calls += 1
        return self.statuses[index]


class FakeConsentUI(ConsentUI):
    def __init__(self, answer: bool = True, interrupt: bool = False):
        self.presented: List[PromptVariant] = []
        self.fallback_notices = 0
        self.answer = answer
        self.interrupt = interrupt
        self.waits = 0

    def present(self, variant: PromptVariant) -> None:
        self.presented.append(variant)

    def wait_for_answer(self) -> bool:
        self.waits += 1
        if self.interrupt:
            raise KeyboardInterrupt
        return self.answer

    def show_fallback_notice(self) -> None:
        self.fallback_notices += 1


class FakeNavigator(SettingsNavigatorProtocol):
    def __init__(self, results: Optional[Dict[SettingsScreen, LaunchResult]] = None):
        self.results = results or {}
        self.opened = []
        self.interrupt = False
        self.waits = 0

    def open(self, screen: SettingsScreen, hint: Optional[str] = None) -> LaunchResult:
        self.opened.append((screen, hint))
        return self.results.get(screen, LaunchResult.LAUNCHED)

    def wait_for_return(self) -> None:
        self.waits += 1
        if self.interrupt:
            raise KeyboardInterrupt


class RecordingService(DependentService):
    def __init__(self):
        self.notifications: List[OutcomeNotification] = []

    def notify(self, notification: OutcomeNotification) -> None:
        self.notifications.append(notification)


def write_settings(config_dir: Path, filename: str = "settings.yaml", **values) -> None:
    config_dir.mkdir(parents=True, exist_ok=True)
    with open(config_dir / filename, "w", encoding="utf-8") as f:
        yaml.safe_dump(values, f)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep GRANTFLOW_* variables from the developer's shell out of tests."""
    for env_name in ENV_OVERRIDES.values():
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.delenv("GRANTFLOW_CONFIG_DIR", raising=False)


@pytest.fixture
def config_dir(tmp_path) -> Path:
    path = tmp_path / "grantflow"
    path.mkdir()
    return path


@pytest.fixture
def config(config_dir) -> ConfigStore:
    return ConfigStore(config_dir)


@pytest.fixture
def consent_ui() -> FakeConsentUI:
    return FakeConsentUI()


@pytest.fixture
def navigator() -> FakeNavigator:
    return FakeNavigator()


@pytest.fixture
def service() -> RecordingService:
    return RecordingService()


@pytest.fixture
def make_controller(config, consent_ui, navigator, service):
    """Build a controller wired to the fakes."""

    def _make(
        request: Optional[FlowRequest] = None,
        status: Optional[FakeStatusProvider] = None,
        platform_supports_autostart: bool = True,
    ) -> PermissionFlowController:
        return PermissionFlowController(
            request=request or FlowRequest(),
            config=config,
            status_provider=status or FakeStatusProvider(False),
            consent_ui=consent_ui,
            navigator=navigator,
            service=service,
            platform_supports_autostart=platform_supports_autostart,
            settings_hint="io.grantflow/grantflow.InputService",
        )

    return _make
