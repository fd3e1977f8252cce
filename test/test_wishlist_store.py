import asyncio
import json
import sys
import tempfile
import threading
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from domain.wishlist import (
    DuplicateEntry,
    EntryStatus,
    MediaType,
    NewWishlistEntry,
    StorageError,
)
from infrastructure.persistence.json_file import JsonWishlistStore


def _new(catalog_id, title="X", media_type=MediaType.MOVIE, external_id=None) -> NewWishlistEntry:
    return NewWishlistEntry(
        catalog_id=catalog_id,
        title=title,
        media_type=media_type,
        external_id=external_id,
    )


class TestJsonWishlistStore(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "data" / "wishlist.json"
        self.store = JsonWishlistStore(path=self.path)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    async def test_missing_file_initializes_empty_store(self) -> None:
        self.assertFalse(self.path.exists())
        self.assertEqual(await self.store.list_entries(), [])
        self.assertTrue(self.path.exists())
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), [])

    async def test_add_then_list_in_insertion_order(self) -> None:
        first = await self.store.add_entry(_new(42, "Interstellar", external_id="tt0816692"))
        await self.store.add_entry(_new("1399", "Game of Thrones", MediaType.SERIES))

        self.assertIsNotNone(first.created_at)
        self.assertEqual(first.created_at.tzinfo, timezone.utc)
        entries = await self.store.list_entries()
        self.assertEqual([e.title for e in entries], ["Interstellar", "Game of Thrones"])
        self.assertEqual(entries[0].catalog_id, 42)
        self.assertEqual(entries[0].external_id, "tt0816692")
        self.assertEqual(entries[1].media_type, MediaType.SERIES)
        self.assertEqual(entries[0].created_at, first.created_at)

    async def test_duplicate_catalog_id_is_rejected_across_representations(self) -> None:
        await self.store.add_entry(_new(42))
        before = self.path.read_text(encoding="utf-8")

        with self.assertRaises(DuplicateEntry):
            await self.store.add_entry(_new("42", "Other"))

        self.assertEqual(self.path.read_text(encoding="utf-8"), before)
        self.assertEqual(len(await self.store.list_entries()), 1)

    async def test_duplicate_external_id_is_rejected(self) -> None:
        await self.store.add_entry(_new(1, external_id="tt001"))
        with self.assertRaises(DuplicateEntry):
            await self.store.add_entry(_new(2, external_id="tt001"))
        # Entries without an external id never collide on it.
        await self.store.add_entry(_new(3))
        await self.store.add_entry(_new(4))
        self.assertEqual(len(await self.store.list_entries()), 3)

    async def test_remove_many_reports_count_and_is_idempotent(self) -> None:
        await self.store.add_entry(_new(10))
        await self.store.add_entry(_new(11))

        removed = await self.store.remove_many([10, "999"])
        self.assertEqual(removed, 1)
        before = self.path.stat().st_mtime_ns

        removed_again = await self.store.remove_many(["10", 999])
        self.assertEqual(removed_again, 0)
        self.assertEqual(self.path.stat().st_mtime_ns, before)
        self.assertEqual([e.key for e in await self.store.list_entries()], ["11"])

    async def test_remove_single(self) -> None:
        await self.store.add_entry(_new(5))
        self.assertTrue(await self.store.remove("5"))
        self.assertFalse(await self.store.remove(5))

    async def test_clear_is_idempotent(self) -> None:
        await self.store.add_entry(_new(1))
        await self.store.add_entry(_new(2))
        await self.store.clear()
        self.assertEqual(await self.store.list_entries(), [])
        await self.store.clear()
        self.assertEqual(await self.store.list_entries(), [])

    async def test_corrupt_file_raises_and_is_left_untouched(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("{not json", encoding="utf-8")

        with self.assertRaises(StorageError):
            await self.store.list_entries()
        with self.assertRaises(StorageError):
            await self.store.add_entry(_new(1))
        self.assertEqual(self.path.read_text(encoding="utf-8"), "{not json")

    async def test_undecodable_file_raises_and_is_left_untouched(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(b"[\xff\xfe]")

        with self.assertRaises(StorageError):
            await self.store.list_entries()
        with self.assertRaises(StorageError):
            await self.store.add_entry(_new(1))
        self.assertEqual(self.path.read_bytes(), b"[\xff\xfe]")

    async def test_non_array_document_is_a_storage_error(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text('{"a": 1}', encoding="utf-8")
        with self.assertRaises(StorageError):
            await self.store.list_entries()

    async def test_reads_records_with_legacy_field_names(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        legacy = [
            {
                "tmdbId": 603,
                "title": "黑客帝国",
                "mediaType": "movie",
                "imdbId": "tt0133093",
                "createdAt": "2024-05-01T08:00:00.000Z",
            },
            {
                "tmdbId": 1396,
                "title": "绝命毒师",
                "mediaType": "tv",
                "imdbId": None,
                "createdAt": "2024-05-02T08:00:00.000Z",
            },
        ]
        self.path.write_text(json.dumps(legacy, ensure_ascii=False), encoding="utf-8")

        entries = await self.store.list_entries()
        self.assertEqual(entries[0].catalog_id, 603)
        self.assertEqual(entries[0].external_id, "tt0133093")
        self.assertEqual(entries[1].media_type, MediaType.SERIES)
        self.assertEqual(entries[1].created_at, datetime(2024, 5, 2, 8, 0, tzinfo=timezone.utc))

        with self.assertRaises(DuplicateEntry):
            await self.store.add_entry(_new(700, external_id="tt0133093"))

    async def test_set_status_only_touches_lifecycle_fields(self) -> None:
        created = await self.store.add_entry(_new(7, "Dune", external_id="tt1160419"))
        at = datetime(2025, 1, 1, tzinfo=timezone.utc)

        on_hold = await self.store.set_status(7, EntryStatus.ON_HOLD, at=at)
        self.assertEqual(on_hold.status, EntryStatus.ON_HOLD)
        added = await self.store.set_status("7", EntryStatus.ADDED, at=at)
        self.assertEqual(added.status, EntryStatus.ADDED)
        self.assertEqual(added.on_hold_at, at)

        stored = (await self.store.list_entries())[0]
        self.assertEqual(stored.title, "Dune")
        self.assertEqual(stored.external_id, "tt1160419")
        self.assertEqual(stored.created_at, created.created_at)
        self.assertEqual(stored.added_at, at)

        pending = await self.store.set_status(7, EntryStatus.PENDING, at=at)
        self.assertIsNone(pending.on_hold_at)
        self.assertIsNone(pending.added_at)
        self.assertIsNone(await self.store.set_status(8, EntryStatus.ADDED, at=at))

    async def test_concurrent_adds_do_not_lose_updates(self) -> None:
        await asyncio.gather(*(self.store.add_entry(_new(i, f"t{i}")) for i in range(25)))

        entries = await self.store.list_entries()
        self.assertEqual(sorted(int(e.key) for e in entries), list(range(25)))

    async def test_concurrent_duplicate_adds_keep_exactly_one(self) -> None:
        results = await asyncio.gather(
            self.store.add_entry(_new(1)),
            self.store.add_entry(_new(1)),
            return_exceptions=True,
        )
        self.assertEqual(sum(isinstance(r, DuplicateEntry) for r in results), 1)
        self.assertEqual(len(await self.store.list_entries()), 1)

    async def test_concurrent_mixed_mutations_are_serialized(self) -> None:
        await self.store.add_entry(_new(100))
        await asyncio.gather(
            self.store.add_entry(_new(1)),
            self.store.remove_many([100]),
            self.store.add_entry(_new(2)),
        )
        self.assertEqual(sorted(e.key for e in await self.store.list_entries()), ["1", "2"])

    async def test_cancelled_add_keeps_lock_until_write_lands(self) -> None:
        await self.store.list_entries()
        started = threading.Event()
        release = threading.Event()
        real_dump = self.store._doc.dump

        def slow_dump(data):
            started.set()
            release.wait(5)
            real_dump(data)

        with patch.object(self.store._doc, "dump", side_effect=slow_dump):
            first = asyncio.create_task(self.store.add_entry(_new(1)))
            await asyncio.to_thread(started.wait, 5)
            first.cancel()
            second = asyncio.create_task(self.store.add_entry(_new(2)))
            await asyncio.sleep(0)
            release.set()
            with self.assertRaises(asyncio.CancelledError):
                await first
            await second

        self.assertEqual(sorted(e.key for e in await self.store.list_entries()), ["1", "2"])

    async def test_timestamps_round_trip_with_microseconds(self) -> None:
        created = await self.store.add_entry(_new(1))
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertTrue(raw[0]["createdAt"].endswith("Z"))
        reloaded = JsonWishlistStore(path=self.path)
        self.assertEqual((await reloaded.list_entries())[0].created_at, created.created_at)


if __name__ == "__main__":
    unittest.main()
