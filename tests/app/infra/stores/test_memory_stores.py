"""Testes dos stores em memória."""

from __future__ import annotations

import pytest

from app.infra.stores.memory_stores import (
    MemoryChatContactStore,
    MemoryCredentialStore,
    MemoryWebhookRegistry,
)


class TestMemoryChatContactStore:
    def test_read_empty_snapshot(self) -> None:
        assert MemoryChatContactStore().read() == {"chats": [], "contacts": []}

    def test_merge_concatenates_without_dedup(self) -> None:
        store = MemoryChatContactStore()
        store.merge([{"id": "x"}], [])
        store.merge([{"id": "y"}, {"id": "x"}], [{"id": "c"}])

        assert store.read() == {
            "chats": [{"id": "x"}, {"id": "y"}, {"id": "x"}],
            "contacts": [{"id": "c"}],
        }

    @pytest.mark.asyncio
    async def test_async_wrappers(self) -> None:
        store = MemoryChatContactStore()
        await store.merge_async([], [{"id": "c"}])
        assert (await store.read_async())["contacts"] == [{"id": "c"}]


class TestMemoryWebhookRegistry:
    def test_insert_appends_and_ignores_empty(self) -> None:
        registry = MemoryWebhookRegistry(["https://a"])
        registry.insert("https://b")
        registry.insert("")

        assert registry.list() == ["https://a", "https://b"]

    def test_delete_at_out_of_range_is_noop(self) -> None:
        registry = MemoryWebhookRegistry(["https://a", "https://b"])
        registry.delete_at(5)
        registry.delete_at(-1)
        registry.delete_at(0)

        assert registry.list() == ["https://b"]

    def test_list_returns_copy(self) -> None:
        registry = MemoryWebhookRegistry(["https://a"])
        registry.list().append("https://mutated")
        assert registry.list() == ["https://a"]


class TestMemoryCredentialStore:
    @pytest.mark.asyncio
    async def test_save_load_and_clear(self) -> None:
        store = MemoryCredentialStore()
        assert await store.load() is None

        state = {"creds": {"noiseKey": b"\x01\x02"}}
        await store.save(state)
        state["creds"]["noiseKey"] = b"changed"

        assert await store.load() == {"creds": {"noiseKey": b"\x01\x02"}}
        assert store.save_count == 1

        await store.clear()
        assert await store.load() is None
