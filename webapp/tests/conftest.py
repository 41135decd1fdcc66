"""Shared fixtures for the validation app tests."""

import pytest

from inputcheck.app import create_app
from inputcheck.config.settings import TestConfig
from inputcheck.domain.validation_config import ValidatorConfig


@pytest.fixture
def app():
    """Application built from TestConfig (checksum off, DNS off)."""
    return create_app(TestConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def default_config():
    return ValidatorConfig()


@pytest.fixture
def checksum_config():
    return ValidatorConfig(checksum_enabled=True)
