"""Shared pytest configuration and fixtures."""

import pytest

LOREM = "Lorem ipsum dolor sit amet, consectetuer adipiscing elit. "


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


@pytest.fixture()
def long_text() -> str:
    """1500 ASCII characters of lorem ipsum, ending on a non-blank character."""
    return (LOREM * 30)[:1500]
