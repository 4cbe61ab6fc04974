"""Shared fixtures for CLI tests."""

import pytest

from legacy_api.auth import StaticTokenProvider
from legacy_api.cli.app import create_cli_app
from legacy_api.cli.state import CLIState
from legacy_api.client import LegacyApiClient


@pytest.fixture
def test_app(test_settings):
    """Provide CLI app with test settings injected."""
    return create_cli_app(settings=test_settings)


@pytest.fixture
def default_app():
    """Provide CLI app with default settings."""
    return create_cli_app()


@pytest.fixture
def cli_state(test_settings, fake_transport, mock_logger):
    """CLIState whose clients talk to the fake transport."""

    def client_factory(settings):
        return LegacyApiClient(
            transport=fake_transport,
            token_provider=StaticTokenProvider("cli-token"),
            settings=settings,
            logger=mock_logger,
        )

    return CLIState(test_settings, client_factory=client_factory)


@pytest.fixture
def app_with_fake_client(cli_state):
    """CLI app whose call command sends through the fake transport."""
    return create_cli_app(state=cli_state)
