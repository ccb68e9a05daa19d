"""Tests for the collections registry (crudgen.registry.collections).

Covers:
- Rendering (header, sorted unique keys, empty registry, trailing newline)
- Parsing a rendered file back into module names
- Loading from disk (missing file -> empty registry, other OS errors raise)
- update_collections_config rewriting the file
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from crudgen.registry.collections import CollectionRegistry, update_collections_config


pytestmark = pytest.mark.unit

STAMP = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRender:
    def test_full_file(self):
        registry = CollectionRegistry(["user", "order"])
        assert registry.render(STAMP) == (
            "// This file is auto-generated. Do not edit manually\n"
            "// Generated on: 2024-01-02T03:04:05+00:00\n"
            "\n"
            "export const COLLECTIONS = {\n"
            "    ORDER: 'orders',\n"
            "    USER: 'users'\n"
            "} as const\n"
            "\n"
            "export type CollectionName = typeof COLLECTIONS[keyof typeof COLLECTIONS]\n"
            "\n"
            "// Collection names mapping\n"
            "export const collectionNames = Object.values(COLLECTIONS)\n"
        )

    def test_empty_registry(self):
        rendered = CollectionRegistry().render(STAMP)
        assert "export const COLLECTIONS = {\n} as const\n" in rendered
        assert rendered.endswith("\n")

    def test_plurals_recomputed(self):
        registry = CollectionRegistry(["category", "person", "status", "address"])
        assert dict(registry.entries()) == {
            "ADDRESS": "address",
            "CATEGORY": "categories",
            "PERSON": "people",
            "STATUS": "statuses",
        }

    def test_kebab_names_become_identifier_keys(self):
        registry = CollectionRegistry(["tahun-ajaran"])
        assert registry.entries() == [("TAHUN_AJARAN", "tahun_ajarans")]

    def test_keys_unique_and_sorted(self):
        registry = CollectionRegistry(["user", "order", "user", "invoice"])
        keys = [key for key, _ in registry.entries()]
        assert keys == ["INVOICE", "ORDER", "USER"]
        assert len(registry) == 3

    def test_render_defaults_to_now(self):
        rendered = CollectionRegistry().render()
        assert "// Generated on: " in rendered.splitlines()[1]


# ---------------------------------------------------------------------------
# Mutation / parsing
# ---------------------------------------------------------------------------


class TestMutation:
    def test_add_reports_novelty(self):
        registry = CollectionRegistry()
        assert registry.add("order") is True
        assert registry.add("order") is False
        assert registry.add("Order") is False

    def test_add_empty_rejected(self):
        with pytest.raises(ValueError):
            CollectionRegistry().add("")

    def test_contains(self):
        registry = CollectionRegistry(["tahun-ajaran"])
        assert "tahun_ajaran" in registry
        assert "tahun-ajaran" in registry
        assert "order" not in registry
        assert 42 not in registry


class TestParse:
    def test_round_trip(self):
        original = CollectionRegistry(["user", "order", "tahun-ajaran"])
        parsed = CollectionRegistry.parse(original.render(STAMP))
        assert parsed.modules == original.modules

    def test_parse_hand_edited_quotes(self):
        content = 'export const COLLECTIONS = {\n  USER: "users",\n  ORDER_ITEM: \'order_items\'\n}'
        assert CollectionRegistry.parse(content).modules == ["order_item", "user"]

    def test_parse_ignores_non_entries(self):
        rendered = CollectionRegistry().render(STAMP)
        assert len(CollectionRegistry.parse(rendered)) == 0


# ---------------------------------------------------------------------------
# Disk I/O
# ---------------------------------------------------------------------------


class TestLoadSave:
    async def test_load_missing_is_empty(self, tmp_path: Path):
        registry = await CollectionRegistry.load(tmp_path / "nope.ts")
        assert len(registry) == 0

    async def test_load_other_os_error_propagates(self, tmp_path: Path):
        path = tmp_path / "collections.config.ts"
        path.mkdir()
        with pytest.raises(OSError):
            await CollectionRegistry.load(path)

    async def test_save_and_load(self, tmp_path: Path):
        path = tmp_path / "config" / "collections.config.ts"
        await CollectionRegistry(["order"]).save(path, STAMP)
        assert path.exists()
        assert (await CollectionRegistry.load(path)).modules == ["order"]

    async def test_update_adds_module(self, tmp_path: Path):
        path = tmp_path / "collections.config.ts"
        await CollectionRegistry(["user"]).save(path, STAMP)

        registry = await update_collections_config(path, "order")

        assert registry.modules == ["order", "user"]
        content = path.read_text(encoding="utf-8")
        assert "    ORDER: 'orders',\n    USER: 'users'\n" in content

    async def test_update_twice_keeps_one_entry(self, tmp_path: Path):
        path = tmp_path / "collections.config.ts"
        await update_collections_config(path, "order")
        await update_collections_config(path, "order")
        content = path.read_text(encoding="utf-8")
        assert content.count("ORDER:") == 1
