"""Pytest fixtures for the taskboard tests."""

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskboard.config import Settings
from taskboard.database import TaskStore
from taskboard.main import create_app


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(port=8000, database_url=f"sqlite:///{tmp_path / 'tasks.db'}")


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client for the app; shutdown runs on exit."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def store(app: FastAPI) -> TaskStore:
    return app.state.store
