"""Unit tests for derived queries (top, bottom, find_by_value, range)."""

from __future__ import annotations

import json

import pytest
from pydantic import BaseModel

from laakhay.rtdb import Entry


class Post(BaseModel):
    title: str
    score: int


class TestTopBottom:
    """Test top/bottom ordering and limits."""

    @pytest.mark.asyncio
    async def test_top_is_descending(self, client, posts_store):
        entries = await client.top("/posts", 2, "score")
        assert [e.key for e in entries] == ["-N005", "-N004"]
        params = posts_store.requests[-1].params
        assert params["limitToLast"] == "2"
        assert json.loads(params["orderBy"]) == "score"

    @pytest.mark.asyncio
    async def test_bottom_is_ascending(self, client, posts_store):
        entries = await client.bottom("/posts", 3, "score")
        assert [e.key for e in entries] == ["-N001", "-N002", "-N003"]
        assert posts_store.requests[-1].params["limitToFirst"] == "3"

    @pytest.mark.asyncio
    async def test_default_orders_by_key(self, client, posts_store):
        entries = await client.top("/posts", 1)
        assert entries == [Entry(key="-N005", value={"title": "post 5", "score": 50})]
        assert json.loads(posts_store.requests[-1].params["orderBy"]) == "$key"

    @pytest.mark.asyncio
    async def test_count_larger_than_node(self, client, posts_store):
        entries = await client.top("/posts", 50, "score")
        assert len(entries) == 5
        assert entries[0].key == "-N005"

    @pytest.mark.asyncio
    async def test_missing_node(self, client):
        assert await client.top("/nothing", 3) == []
        assert await client.bottom("/nothing", 3) == []

    @pytest.mark.asyncio
    async def test_invalid_count(self, client):
        with pytest.raises(ValueError):
            await client.top("/posts", 0)

    @pytest.mark.asyncio
    async def test_with_model(self, client, posts_store):
        entries = await client.bottom("/posts", 1, "score", model=Post)
        assert entries[0].value == Post(title="post 1", score=10)

    @pytest.mark.asyncio
    async def test_numeric_keys_order_numerically(self, client, store):
        store.write("scores", {"9": 1, "10": 2, "2": 3, "a": 4})
        entries = await client.bottom("/scores", 4)
        assert [e.key for e in entries] == ["2", "9", "10", "a"]


class TestFindByValue:
    """Test equality lookups."""

    @pytest.mark.asyncio
    async def test_matches_child_field(self, client, store):
        store.write(
            "users",
            {
                "u1": {"status": "active"},
                "u2": {"status": "idle"},
                "u3": {"status": "active"},
            },
        )
        entries = await client.find_by_value("/users", "status", "active")
        assert [e.key for e in entries] == ["u1", "u3"]
        assert json.loads(store.requests[-1].params["equalTo"]) == "active"

    @pytest.mark.asyncio
    async def test_no_match(self, client, posts_store):
        assert await client.find_by_value("/posts", "score", 11) == []

    @pytest.mark.asyncio
    async def test_boolean_value_is_json_encoded(self, client, store):
        store.write("flags", {"a": {"on": True}, "b": {"on": False}})
        entries = await client.find_by_value("/flags", "on", True)
        assert [e.key for e in entries] == ["a"]
        assert store.requests[-1].params["equalTo"] == "true"


class TestRange:
    """Test inclusive range lookups."""

    @pytest.mark.asyncio
    async def test_inclusive_bounds_ascending(self, client, posts_store):
        entries = await client.range("/posts", "score", 20, 40)
        assert [e.key for e in entries] == ["-N002", "-N003", "-N004"]
        params = posts_store.requests[-1].params
        assert params["startAt"] == "20"
        assert params["endAt"] == "40"

    @pytest.mark.asyncio
    async def test_string_bounds(self, client, store):
        store.write("people", {"a": {"name": "ann"}, "b": {"name": "bob"}, "c": {"name": "cy"}})
        entries = await client.range("/people", "name", "b", "c")
        assert [e.key for e in entries] == ["b"]
        assert store.requests[-1].params["startAt"] == '"b"'

    @pytest.mark.asyncio
    async def test_empty_range(self, client, posts_store):
        assert await client.range("/posts", "score", 41, 49) == []
