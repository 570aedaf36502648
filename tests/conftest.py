"""
Test configuration and fixtures for the SEO Audit Engine.

Environment overrides are applied before the app is imported so the cached
settings pick them up: no log files, no Redis.
"""

import os
from typing import Generator

from dotenv import load_dotenv

import pytest
from fastapi.testclient import TestClient

load_dotenv()

os.environ["LOG_TO_FILE"] = "false"
os.environ["FORCE_IN_MEMORY_RATE_LIMITER"] = "true"
os.environ.pop("REDIS_URL", None)


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import create_app

    # Rate limiting has its own tests with their own app
    return create_app(rate_limits={})


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Create a test client for making HTTP requests.
    This fixture provides a clean TestClient instance for each test function,
    ensuring proper isolation between tests.
    """
    with TestClient(test_app) as test_client:
        yield test_client


def page(head: str = "", body: str = "", lang: str = "en") -> str:
    """Assemble a minimal HTML5 document."""
    lang_attr = f' lang="{lang}"' if lang else ""
    return f"<!DOCTYPE html>\n<html{lang_attr}>\n<head>\n{head}\n</head>\n<body>\n{body}\n</body>\n</html>"


@pytest.fixture
def make_page():
    return page
