"""Shared fixtures: a frozen clock and a server built from the default catalog."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from datetime import datetime, timezone

import pytest

from mcpedge.config.models import ServerConfig
from mcpedge.registry.builtin import build_default_registry
from mcpedge.registry.registry import CapabilityRegistry
from mcpedge.server.dispatcher import MethodDispatcher
from mcpedge.server.logging_state import LogLevelState
from mcpedge.server.transport import TransportGate

FIXED_NOW = datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig()


@pytest.fixture
def registry(config: ServerConfig) -> CapabilityRegistry:
    return build_default_registry(config, clock=lambda: FIXED_NOW, rng=random.Random(1234))


@pytest.fixture
def client_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("mcpedge.tests.client")
    yield logger
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def log_state(client_logger: logging.Logger) -> LogLevelState:
    return LogLevelState(logger=client_logger)


@pytest.fixture
def dispatcher(
    registry: CapabilityRegistry, config: ServerConfig, log_state: LogLevelState
) -> MethodDispatcher:
    return MethodDispatcher(registry, config, log_state=log_state)


@pytest.fixture
def gate(dispatcher: MethodDispatcher, config: ServerConfig) -> TransportGate:
    return TransportGate(dispatcher, config)
