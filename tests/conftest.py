"""Pytest configuration and fixtures."""

from collections import defaultdict

import pytest
from fastapi.testclient import TestClient

from lambda_users.config import Settings, get_settings
from lambda_users.main import app, get_store
from lambda_users.store import ConditionFailed, PutCondition, StoreError

TABLE_NAME = "users-test"


class InMemoryUserStore:
    """Dict-backed ``UserStore`` that records calls and can be told to fail."""

    def __init__(self):
        self.tables = defaultdict(dict)
        self.calls = []
        self.fail_on = set()
        self.conditions = []

    def _record(self, operation):
        self.calls.append(operation)
        if operation in self.fail_on:
            raise StoreError(f"{operation} failed")

    def get(self, table_name, key):
        self._record("get")
        item = self.tables[table_name].get(key)
        return dict(item) if item is not None else None

    def scan(self, table_name):
        self._record("scan")
        return [dict(item) for item in self.tables[table_name].values()]

    def put(self, table_name, item, condition=None):
        self._record("put")
        self.conditions.append(condition)
        exists = item["email"] in self.tables[table_name]
        if condition is PutCondition.MUST_NOT_EXIST and exists:
            raise ConditionFailed("item exists")
        if condition is PutCondition.MUST_EXIST and not exists:
            raise ConditionFailed("item does not exist")
        self.tables[table_name][item["email"]] = dict(item)

    def delete(self, table_name, key):
        self._record("delete")
        self.tables[table_name].pop(key, None)


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def settings() -> Settings:
    return Settings(dynamodb_table_name=TABLE_NAME, conditional_writes=False)


@pytest.fixture
def api_overrides(store, settings):
    """Point the app's dependencies at the in-memory store and test settings."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(api_overrides) -> TestClient:
    """Create a FastAPI test client."""
    return TestClient(app)
