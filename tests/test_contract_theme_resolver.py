from __future__ import annotations

import unittest

from _support import MemoryBackend, RecordingRenderer

from skinner.library import BACKGROUND, AssetLibrary
from skinner.resolver import BackgroundVisual, PagerVisual, ThemeResolver
from skinner.store import ConfigStore


class TestThemeResolverContract(unittest.TestCase):
    def setUp(self) -> None:
        self.resolver = ThemeResolver()

    def test_empty_config_uses_default_colors(self) -> None:
        theme = self.resolver.resolve({})
        self.assertEqual(theme.background, BackgroundVisual("color", "#303030"))
        self.assertEqual(theme.pager, PagerVisual("color", "#fff200"))

    def test_active_assets_win_over_colors(self) -> None:
        theme = self.resolver.resolve({
            "backgroundHex": "#000000",
            "savedBackgrounds": [{"name": "sunset", "url": "u1"}],
            "appliedBackgroundName": "sunset",
            "pagerHex": "#ffffff",
            "savedPagerSkins": [{"name": "chrome", "url": "s1"}],
            "appliedPagerSkinName": "chrome",
        })
        self.assertEqual(theme.background, BackgroundVisual("image", "u1"))
        self.assertEqual(theme.pager, PagerVisual("skin", "s1"))

    def test_dangling_active_name_falls_back_to_color(self) -> None:
        theme = self.resolver.resolve({
            "backgroundHex": "#123456",
            "savedBackgrounds": [],
            "appliedBackgroundName": "gone",
        })
        self.assertEqual(theme.background, BackgroundVisual("color", "#123456"))

    def test_first_duplicate_is_rendered(self) -> None:
        theme = self.resolver.resolve({
            "savedPagerSkins": [{"name": "x", "url": "first"}, {"name": "x", "url": "second"}],
            "appliedPagerSkinName": "x",
        })
        self.assertEqual(theme.pager, PagerVisual("skin", "first"))

    def test_wrongly_typed_fields_fall_back(self) -> None:
        theme = self.resolver.resolve({
            "backgroundHex": 42,
            "savedBackgrounds": "not-a-list",
            "appliedBackgroundName": "x",
        })
        self.assertEqual(theme.background, BackgroundVisual("color", "#303030"))

    def test_apply_is_idempotent(self) -> None:
        config = {
            "savedBackgrounds": [{"name": "sunset", "url": "u1"}],
            "appliedBackgroundName": "sunset",
            "pagerHex": "#00ff00",
        }
        first, second = RecordingRenderer(), RecordingRenderer()

        self.resolver.apply(config, first)
        self.resolver.apply(config, second)

        self.assertEqual(first.calls, second.calls)
        self.assertEqual(
            first.calls,
            [("background", "image", "u1"), ("pager_color", "#00ff00")],
        )

    def test_sunset_applied_then_unapplied(self) -> None:
        backend = MemoryBackend()
        store = ConfigStore(backend)
        library = AssetLibrary(BACKGROUND, store)
        renderer = RecordingRenderer()

        library.add("sunset", "u1")
        library.toggle("sunset")
        self.resolver.apply(store.get(), renderer)
        self.assertEqual(renderer.calls[-2], ("background", "image", "u1"))

        library.toggle("sunset")
        self.resolver.apply(store.get(), renderer)
        self.assertEqual(renderer.calls[-2], ("background", "color", "#303030"))
        self.assertEqual(backend.stored["savedBackgrounds"], [{"name": "sunset", "url": "u1"}])

    def test_removing_the_applied_background_reverts_to_default(self) -> None:
        backend = MemoryBackend()
        store = ConfigStore(backend)
        library = AssetLibrary(BACKGROUND, store)
        renderer = RecordingRenderer()

        library.add("sunset", "u1")
        library.toggle("sunset")
        self.resolver.apply(store.get(), renderer)
        library.remove(0)
        self.resolver.apply(store.get(), renderer)

        backgrounds = [call for call in renderer.calls if call[0] == "background"]
        self.assertEqual(backgrounds, [("background", "image", "u1"), ("background", "color", "#303030")])


if __name__ == "__main__":
    unittest.main(verbosity=2)
