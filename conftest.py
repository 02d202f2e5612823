# type: ignore
"""Shared fixtures: in-memory SQLite store, scheduler disabled."""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["CLAN_ID"] = "testclan"
os.environ["CLAN_TIMEZONE"] = "Europe/Berlin"

import pytest

from app.core.dependencies import get_document_store, get_member_repo, get_settings_repo


@pytest.fixture(autouse=True)
def store():
    """Fresh, empty document store for every test."""
    doc_store = get_document_store()
    doc_store.create_schema()
    doc_store.clear()
    yield doc_store
    doc_store.clear()


@pytest.fixture
def settings_repo():
    return get_settings_repo()


@pytest.fixture
def member_repo():
    return get_member_repo()
