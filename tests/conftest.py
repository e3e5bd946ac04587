"""Shared fixtures for the html_tree tests."""

import pytest

from html_tree import Node, create_document
from html_tree.utils.config import CONFIG_ENV_VAR, Config, set_config


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Give every test a fresh default configuration."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    config = Config()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def document():
    return create_document()


@pytest.fixture
def dynamic_document():
    return create_document(dynamic=True)


@pytest.fixture
def node():
    return Node("div")
