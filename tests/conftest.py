"""
Pytest configuration and shared fixtures for tests.
"""

import asyncio
from logging import Logger
from typing import Callable, Generator

import pytest

from smart_rlm.agents.leaf_agent import LeafQueryAgent
from smart_rlm.utils.logger import logger as app_logger
from tests.doubles import ScriptedModelClient


@pytest.fixture(scope="session")
def logger() -> Generator[Logger, None, None]:
    """
    Pytest fixture that provides the application logger.

    Usage:
        def test_something(logger):
            logger.info("Test log message")
    """
    yield app_logger


@pytest.fixture
def run() -> Callable:
    """
    Drive a coroutine to completion on a fresh event loop.

    Usage:
        def test_something(run):
            result = run(agent.ask("chunk", "query"))
    """
    return asyncio.run


@pytest.fixture
def make_client() -> Callable[..., ScriptedModelClient]:
    """Factory for ScriptedModelClient doubles."""
    return ScriptedModelClient


@pytest.fixture
def make_leaf_agent(make_client) -> Callable[..., LeafQueryAgent]:
    """Factory for a LeafQueryAgent backed by a scripted leaf responder."""

    def _make(leaf=None) -> LeafQueryAgent:
        return LeafQueryAgent(client=make_client(leaf=leaf), model="test/leaf")

    return _make
