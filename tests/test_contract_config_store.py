from __future__ import annotations

import unittest

from _support import MemoryBackend

from skinner.store import ConfigStore


class TestConfigStoreContract(unittest.TestCase):
    def test_later_patch_keys_win_and_untouched_keys_survive(self) -> None:
        backend = MemoryBackend()
        store = ConfigStore(backend)

        self.assertEqual(store.patch({"a": 1}), {"a": 1})
        self.assertEqual(store.patch({"b": 2}), {"a": 1, "b": 2})
        self.assertEqual(store.patch({"a": 3}), {"a": 3, "b": 2})
        self.assertEqual(backend.stored, {"a": 3, "b": 2})

    def test_patch_replaces_whole_values_shallowly(self) -> None:
        backend = MemoryBackend({"savedBackgrounds": [{"name": "x", "url": "u"}], "other": {"k": 1}})
        store = ConfigStore(backend)

        merged = store.patch({"savedBackgrounds": []})
        self.assertEqual(merged["savedBackgrounds"], [])
        self.assertEqual(merged["other"], {"k": 1})

    def test_read_failure_is_an_empty_config(self) -> None:
        backend = MemoryBackend({"a": 1})
        backend.fail_reads = True
        self.assertEqual(ConfigStore(backend).get(), {})

    def test_non_object_payload_is_an_empty_config(self) -> None:
        class ListBackend:
            def get_config(self):
                return ["not", "a", "dict"]

        self.assertEqual(ConfigStore(ListBackend()).get(), {})

    def test_write_failure_is_dropped_but_merge_is_returned(self) -> None:
        backend = MemoryBackend({"a": 1})
        backend.fail_writes = True
        store = ConfigStore(backend)

        merged = store.patch({"b": 2})
        self.assertEqual(merged, {"a": 1, "b": 2})
        self.assertEqual(backend.stored, {"a": 1})

    def test_interleaved_patches_lose_the_intervening_write(self) -> None:
        # Last write wins: patch A reads, patch B reads and writes, then A writes
        # its stale snapshot back and B's key is gone.
        backend = MemoryBackend()
        store = ConfigStore(backend)
        results = {}

        def concurrent_patch():
            results["b"] = store.patch({"b": 2})

        backend.on_get = concurrent_patch
        results["a"] = store.patch({"a": 1})

        self.assertEqual(results["b"], {"b": 2})
        self.assertEqual(results["a"], {"a": 1})
        self.assertEqual(backend.stored, {"a": 1})


if __name__ == "__main__":
    unittest.main(verbosity=2)
