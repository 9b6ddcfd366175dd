from __future__ import annotations

import os
import tempfile
import unittest

from _support import MemoryBackend, RecordingRenderer

from PIL import Image

from skinner.errors import AssetTooLarge, InvalidAsset, UpdateInProgress
from skinner.library import PAGER
from skinner.session import SkinnerSession
from skinner.store import ConfigStore


class TestSkinnerSessionContract(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = MemoryBackend({
            "savedBackgrounds": [{"name": "A", "url": "a"}, {"name": "B", "url": "b"}],
        })
        self.renderer = RecordingRenderer()
        self.session = SkinnerSession(ConfigStore(self.backend), self.renderer)

    def test_load_and_apply_renders_the_stored_theme(self) -> None:
        theme = self.session.load_and_apply()

        self.assertEqual(theme.background.kind, "color")
        self.assertEqual(
            self.renderer.calls,
            [("background", "color", "#303030"), ("pager_color", "#fff200")],
        )
        self.assertEqual(len(self.session.background.items), 2)

    def test_every_mutation_re_renders_and_notifies(self) -> None:
        seen = []
        self.session.add_listener(seen.append)

        self.session.toggle("background", "A")

        self.assertEqual(seen[-1]["appliedBackgroundName"], "A")
        self.assertEqual(self.renderer.calls[-2], ("background", "image", "a"))
        self.assertFalse(self.session.busy)

    def test_mutation_during_an_update_is_rejected(self) -> None:
        errors = []

        def reentrant_toggle():
            try:
                self.session.toggle("background", "B")
            except UpdateInProgress as e:
                errors.append(e)

        self.backend.on_get = reentrant_toggle
        self.session.toggle("background", "A")

        self.assertEqual(len(errors), 1)
        self.assertEqual(self.backend.stored["appliedBackgroundName"], "A")
        self.assertFalse(self.session.busy)

    def test_mutation_during_page_load_is_rejected(self) -> None:
        self.backend.data = '{"backgroundHex": "#111111"}'
        errors = []

        def color_during_load():
            try:
                self.session.set_color("background", "#222222")
            except UpdateInProgress as e:
                errors.append(e)

        self.backend.on_get = color_during_load
        self.session.load_and_apply()

        self.assertEqual(len(errors), 1)
        self.assertEqual(self.backend.stored["backgroundHex"], "#111111")
        self.assertEqual(self.session.config, self.backend.stored)
        self.assertEqual(self.renderer.calls[-2], ("background", "color", "#111111"))
        self.assertFalse(self.session.busy)

    def test_view_matches_store_after_load_then_mutation(self) -> None:
        self.session.load_and_apply()
        self.session.set_color("background", "#222222")

        self.assertEqual(self.session.config, self.backend.stored)
        self.assertEqual(self.renderer.calls[-2], ("background", "color", "#222222"))

    def test_guard_is_released_after_a_failed_mutation(self) -> None:
        with self.assertRaises(IndexError):
            self.session.remove("background", 9)
        self.assertFalse(self.session.busy)
        self.session.toggle("background", "A")
        self.assertEqual(self.session.background.active_name, "A")

    def test_unknown_library_kind(self) -> None:
        with self.assertRaises(KeyError):
            self.session.library("wallpaper")
        self.assertIs(self.session.library(PAGER), self.session.pager)

    def test_preview_does_not_persist(self) -> None:
        self.session.preview_color("pager", "#010203")

        self.assertEqual(self.renderer.calls, [("pager_color", "#010203")])
        self.assertEqual(self.backend.set_calls, 0)

    def test_reapply_without_refetch_uses_the_snapshot(self) -> None:
        self.session.load_and_apply()
        reads = self.backend.get_calls

        self.session.reapply(refetch=False)

        self.assertEqual(self.backend.get_calls, reads)
        self.assertEqual(self.renderer.calls[:2], self.renderer.calls[2:])

    def test_add_file_stores_a_data_uri(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "skin.png")
            Image.new("RGB", (4, 4), "red").save(path, "PNG")

            self.session.add_file("pager", "red", path)

        url = self.session.pager.find("red")["url"]
        self.assertTrue(url.startswith("data:image/png;base64,"))

    def test_add_file_over_the_limit_writes_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "huge.png")
            with open(path, "wb") as f:
                f.write(b"\x00" * (500 * 1024 + 1))

            with self.assertRaises(AssetTooLarge):
                self.session.add_file("background", "huge", path)

        self.assertEqual(self.backend.set_calls, 0)

    def test_add_file_requires_a_name(self) -> None:
        with self.assertRaises(InvalidAsset):
            self.session.add_file("background", "", "/nonexistent.png")

    def test_import_refreshes_the_libraries(self) -> None:
        self.session.import_document('{"savedPagerSkins": [{"name": "chrome", "url": "s1"}]}')
        self.assertEqual([item["name"] for item in self.session.pager.items], ["chrome"])

    def test_describe_marks_the_active_asset(self) -> None:
        self.session.toggle("background", "B")
        lines = self.session.describe()

        self.assertIn("背景: image b", lines)
        self.assertIn("  * 1: B  b", lines)


if __name__ == "__main__":
    unittest.main(verbosity=2)
