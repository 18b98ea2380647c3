"""Shared pytest configuration for build_usher tests."""

import os

import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no AWS calls")
    config.addinivalue_line(
        "markers", "integration: tests against moto-mocked AWS services"
    )


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch) -> None:
    """Set up mock AWS credentials so nothing can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    for name in list(os.environ):
        if name.startswith("BUILD_USHER_"):
            monkeypatch.delenv(name)
