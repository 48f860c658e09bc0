"""Shared fixtures for integration tests against a live database."""

import os
import uuid

import pytest
import pytest_asyncio

from laakhay.rtdb import Credentials, RTDBClient


@pytest.fixture
def credentials() -> Credentials:
    path = os.environ.get("RTDB_CREDENTIALS_FILE")
    if not path:
        pytest.skip("RTDB_CREDENTIALS_FILE is not set")
    return Credentials.from_file(path)


@pytest.fixture
def database() -> str:
    name = os.environ.get("RTDB_DATABASE")
    if not name:
        pytest.skip("RTDB_DATABASE is not set")
    return name


@pytest_asyncio.fixture
async def client(credentials, database):
    async with RTDBClient(credentials=credentials, database=database, timeout=30.0) as db:
        yield db


@pytest_asyncio.fixture
async def scratch(client):
    """Unique scratch path removed after the test."""
    path = f"/laakhay-rtdb-tests/{uuid.uuid4().hex}"
    yield path
    await client.delete(path)
