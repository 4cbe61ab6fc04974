"""Pytest configuration and fixtures for legacy_api tests."""

import loguru
import pytest
from typer.testing import CliRunner

from legacy_api.app import create_app
from legacy_api.auth import StaticTokenProvider
from legacy_api.client import LegacyApiClient
from legacy_api.config.settings import Environment, LogLevel, Settings
from legacy_api.events import BaseEmitter, EventEmitter
from legacy_api.infrastructure.logging import reset_logging
from tests.fakes import BASE_URL, FakeTransport


@pytest.fixture
def test_settings():
    """Provide test-specific settings."""
    return Settings(
        environment=Environment.TESTING,
        log_level=LogLevel.CRITICAL,  # Minimal logging during tests
        base_url=BASE_URL,
    )


@pytest.fixture
def test_app(test_settings):
    """Provide a test app with clean logging state."""
    reset_logging()
    app = create_app(settings=test_settings)
    yield app
    reset_logging()


@pytest.fixture
def mock_logger(mocker):
    """Provide a mock logger for testing that captures log calls."""
    logger = mocker.Mock(spec=loguru.logger)
    return logger


@pytest.fixture
def mock_emitter(mocker):
    """Provide a mock event emitter for testing event emission."""
    emitter = mocker.Mock(spec=BaseEmitter)
    return emitter


@pytest.fixture
def real_emitter(mock_logger):
    """Provide a real EventEmitter for tests that subscribe handlers."""
    return EventEmitter(mock_logger)


@pytest.fixture(autouse=True)
def clean_logging_state():
    """Automatically reset logging before each test for isolation."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def fake_transport():
    """Provide a transport that answers 200 until responses are queued."""
    return FakeTransport()


@pytest.fixture
def token_provider():
    return StaticTokenProvider("test-token")


@pytest.fixture
def client(fake_transport, token_provider, test_settings, mock_logger, mock_emitter):
    """Provide a LegacyApiClient wired to the fake transport."""
    return LegacyApiClient(
        transport=fake_transport,
        token_provider=token_provider,
        settings=test_settings,
        logger=mock_logger,
        emitter=mock_emitter,
    )


@pytest.fixture
def cli_runner():
    """Provide Typer CLI test runner."""
    return CliRunner()
