"""Shared pytest fixtures for storydoc tests."""

import os
import sys
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Add package root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storydoc.main import app


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client
