"""Shared fixtures: an in-memory stand-in for the store's REST interface."""

from __future__ import annotations

import asyncio
import copy
import hashlib
import json
import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from laakhay.rtdb import RTDBClient
from laakhay.rtdb.core import StoreRequestError
from laakhay.rtdb.runtime.rest import RestResponse

PRECONDITION_FAILED = 412


@dataclass
class RecordedRequest:
    method: str
    path: str
    params: dict[str, str]
    headers: dict[str, str]
    body: str | None = None


def _rank(value: Any) -> tuple[int, Any]:
    if value is None:
        return (0, 0)
    if value is False:
        return (1, 0)
    if value is True:
        return (2, 0)
    if isinstance(value, int | float):
        return (3, value)
    if isinstance(value, str):
        return (4, value)
    return (5, 0)


def _key_rank(key: str) -> tuple[int, Any]:
    # Canonical 32-bit integer keys sort first, numerically
    if re.fullmatch(r"0|-?[1-9][0-9]*", key) and -(2**31) <= int(key) < 2**31:
        return (0, int(key))
    return (1, key)


def _etag(value: Any) -> str:
    return hashlib.sha1(json.dumps(value, sort_keys=True).encode()).hexdigest()


@dataclass
class FakeStore:
    """Duck-typed HTTPClient answering like the Realtime Database REST API.

    Filtered query results are returned in reverse order on purpose: the
    real service does not guarantee member order either.
    """

    root: dict[str, Any] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)
    failures: dict[tuple[str, str], int] = field(default_factory=dict)
    closed: bool = False
    push_counter: int = 0

    # -- tree helpers ---------------------------------------------------

    @staticmethod
    def _segments(path: str) -> list[str]:
        return [s for s in path.split("/") if s]

    def read(self, path: str) -> Any:
        node: Any = self.root
        for seg in self._segments(path):
            if not isinstance(node, dict) or seg not in node:
                return None
            node = node[seg]
        if node == {}:
            return None
        return copy.deepcopy(node)

    def write(self, path: str, value: Any) -> None:
        segments = self._segments(path)
        if not segments:
            self.root = copy.deepcopy(value) if isinstance(value, dict) else {}
            return
        node = self.root
        parents: list[tuple[dict[str, Any], str]] = []
        for seg in segments[:-1]:
            child = node.get(seg)
            if not isinstance(child, dict):
                if value is None:
                    return
                child = {}
                node[seg] = child
            parents.append((node, seg))
            node = child
        if value is None:
            node.pop(segments[-1], None)
            for parent, seg in reversed(parents):
                if parent[seg] == {}:
                    del parent[seg]
        else:
            node[segments[-1]] = copy.deepcopy(value)

    def fail(self, method: str, path: str, status: int = 500) -> None:
        self.failures[(method, path.strip("/"))] = status

    def count(self, method: str | None = None) -> int:
        return sum(1 for r in self.requests if method is None or r.method == method)

    # -- HTTPClient surface ----------------------------------------------

    async def request(
        self,
        method: str,
        url: str,
        *,
        body: str | None = None,
        headers: dict[str, str] | None = None,
        operation: str = "request",
        allow_statuses: tuple[int, ...] = (),
    ) -> RestResponse:
        parts = urlsplit(url)
        raw_path = unquote(parts.path)
        assert raw_path.endswith(".json"), raw_path
        path = raw_path[: -len(".json")].strip("/")
        params = {k: v[0] for k, v in parse_qs(parts.query).items()}
        lowered = {k.lower(): v for k, v in (headers or {}).items()}
        self.requests.append(RecordedRequest(method, path, params, lowered, body))

        # Yield like real network I/O so concurrent callers interleave
        await asyncio.sleep(0)

        status = self.failures.get((method, path))
        if status is not None:
            raise StoreRequestError(
                f"{operation} failed: [Internal Server Error] boom",
                status_code=status,
                status_text="Internal Server Error",
                body='{"error": "boom"}',
                operation=operation,
            )

        current = self.read(path)
        if_match = lowered.get("if-match")
        if if_match is not None and if_match != _etag(current):
            if PRECONDITION_FAILED not in allow_statuses:
                raise StoreRequestError(
                    f"{operation} failed: [Precondition Failed] stale",
                    status_code=PRECONDITION_FAILED,
                    status_text="Precondition Failed",
                    body="",
                    operation=operation,
                )
            return RestResponse(
                status=PRECONDITION_FAILED,
                reason="Precondition Failed",
                headers={"ETag": _etag(current)},
                data=current,
            )

        payload = json.loads(body) if body is not None else None
        if method == "GET":
            return self._get(path, params, lowered, current)
        if method == "PUT":
            self.write(path, payload)
            return self._ok(payload, etag=True)
        if method == "PATCH":
            for key, value in payload.items():
                self.write(f"{path}/{key}", value)
            return self._ok(payload)
        if method == "POST":
            self.push_counter += 1
            key = f"-P{self.push_counter:05d}"
            self.write(f"{path}/{key}", payload)
            return self._ok({"name": key})
        if method == "DELETE":
            self.write(path, None)
            return self._ok(None, etag=True)
        raise AssertionError(f"unexpected method {method}")

    def _ok(self, data: Any, etag: bool = False) -> RestResponse:
        headers = {"ETag": _etag(data)} if etag else {}
        return RestResponse(status=200, reason="OK", headers=headers, data=data)

    def _get(
        self, path: str, params: dict[str, str], headers: dict[str, str], current: Any
    ) -> RestResponse:
        if params.get("shallow") == "true":
            if isinstance(current, dict):
                return self._ok({k: True for k in current})
            return self._ok(current)
        if "orderBy" in params:
            return self._ok(self._query(current, params))
        resp_headers = {"ETag": _etag(current)} if headers.get("x-firebase-etag") == "true" else {}
        return RestResponse(status=200, reason="OK", headers=resp_headers, data=current)

    def _query(self, node: Any, params: dict[str, str]) -> Any:
        if not isinstance(node, dict):
            return None
        order_by = json.loads(params["orderBy"])

        def order_value(key: str, value: Any) -> Any:
            if order_by == "$key":
                return _key_rank(key)
            if order_by == "$value":
                return _rank(value)
            current = value
            for part in order_by.split("/"):
                current = current.get(part) if isinstance(current, dict) else None
            return _rank(current)

        def bound(name: str) -> Any:
            raw = json.loads(params[name])
            return _key_rank(raw) if order_by == "$key" else _rank(raw)

        items = sorted(node.items(), key=lambda kv: (order_value(*kv), _key_rank(kv[0])))
        if "startAt" in params:
            items = [kv for kv in items if order_value(*kv) >= bound("startAt")]
        if "startAfter" in params:
            items = [kv for kv in items if order_value(*kv) > bound("startAfter")]
        if "endAt" in params:
            items = [kv for kv in items if order_value(*kv) <= bound("endAt")]
        if "endBefore" in params:
            items = [kv for kv in items if order_value(*kv) < bound("endBefore")]
        if "equalTo" in params:
            items = [kv for kv in items if order_value(*kv) == bound("equalTo")]
        if "limitToFirst" in params:
            items = items[: int(params["limitToFirst"])]
        if "limitToLast" in params:
            items = items[-int(params["limitToLast"]) :]
        return {k: v for k, v in reversed(items)}

    async def close(self) -> None:
        self.closed = True


class FakeExchange:
    """Token exchange counting its calls."""

    def __init__(self, token: str = "token") -> None:
        self.token = token
        self.calls = 0

    async def fetch_token(self) -> str:
        self.calls += 1
        await asyncio.sleep(0)
        return f"{self.token}-{self.calls}"


def make_posts(count: int) -> dict[str, Any]:
    return {f"-N{i:03d}": {"title": f"post {i}", "score": i * 10} for i in range(1, count + 1)}


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def exchange() -> FakeExchange:
    return FakeExchange()


@pytest.fixture
def client(store: FakeStore, exchange: FakeExchange) -> RTDBClient:
    return RTDBClient(database="demo", token_exchange=exchange, http_client=store)


@pytest.fixture
def posts_store(store: FakeStore) -> FakeStore:
    store.write("posts", make_posts(5))
    return store


@pytest.fixture(name="make_posts")
def make_posts_fixture():
    return make_posts
