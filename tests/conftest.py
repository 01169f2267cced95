"""Pytest configuration and fixtures."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog

# Set test environment
os.environ.setdefault("ABACPOLICY_ENVIRONMENT", "test")


@pytest.fixture(autouse=True, scope="session")
def quiet_logging() -> None:
    """Keep log output out of CLI results; loggers resolve streams per call."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def isolated_settings() -> Generator[None, None, None]:
    """Reset the global settings between tests."""
    from abacpolicy.core.config import Settings, configure_settings

    configure_settings(Settings())
    yield
    configure_settings(None)


@pytest.fixture
def admin_rule() -> dict[str, Any]:
    """Rule granting writes on resource1 to user1 with the admin role."""
    return {"role": "admin", "user": "user1", "resource": "resource1"}


@pytest.fixture
def policy_document() -> list[dict[str, Any]]:
    """Sample policy document in the serialized format."""
    return [
        {
            "role": "admin",
            "user": "*",
            "group": "*",
            "resource": "*",
            "namespace": "*",
            "readonly": False,
            "nonResourcePath": "*",
        },
        {
            "role": "*",
            "user": "*",
            "group": "teamA",
            "resource": "reports",
            "namespace": "finance",
            "readonly": True,
            "nonResourcePath": "*",
        },
    ]


@pytest.fixture
def write_policy_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a policy document to a temporary file and return its path."""

    def _write(content: Any, name: str = "policies.json") -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write
