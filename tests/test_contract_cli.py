from __future__ import annotations

import contextlib
import io
import os
import tempfile
import unittest
from unittest import mock

from _support import MemoryBackend

import skinner_cli
from skinner.store import ConfigStore


class TestSkinnerCliContract(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = MemoryBackend({
            "savedBackgrounds": [{"name": "sunset", "url": "u1"}],
        })
        patcher = mock.patch.object(
            skinner_cli, "create_store", lambda: ConfigStore(self.backend)
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def _run(self, *argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = skinner_cli.main(list(argv))
        return code, out.getvalue()

    def test_no_arguments_prints_usage(self) -> None:
        code, out = self._run()
        self.assertEqual(code, 1)
        self.assertIn("用法", out)

    def test_toggle_then_show(self) -> None:
        code, out = self._run("toggle", "bg", "sunset")
        self.assertEqual(code, 0)
        self.assertIn("sunset", out)
        self.assertEqual(self.backend.stored["appliedBackgroundName"], "sunset")

        code, out = self._run("show")
        self.assertEqual(code, 0)
        self.assertIn("背景: image u1", out)

    def test_toggle_unknown_name_warns(self) -> None:
        code, out = self._run("toggle", "bg", "sunst")
        self.assertEqual(code, 0)
        self.assertIn("⚠", out)
        self.assertIn("sunst", out)

        code, out = self._run("toggle", "bg", "sunset")
        self.assertNotIn("⚠", out)

    def test_color_and_reset(self) -> None:
        self.assertEqual(self._run("color", "pager", "#123456")[0], 0)
        self.assertEqual(self.backend.stored["pagerHex"], "#123456")

        self.assertEqual(self._run("reset", "pager")[0], 0)
        self.assertEqual(self.backend.stored["pagerHex"], "#fff200")

    def test_errors_are_reported_not_raised(self) -> None:
        code, out = self._run("color", "bg", "not-a-color")
        self.assertEqual(code, 1)
        self.assertIn("✗", out)

        code, out = self._run("remove", "bg", "7")
        self.assertEqual(code, 1)

        code, out = self._run("list", "wallpaper")
        self.assertEqual(code, 1)

    def test_export_and_import(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "theme.json")
            self.assertEqual(self._run("export", path)[0], 0)

            self.backend.data = "{}"
            self.assertEqual(self._run("import", path)[0], 0)

        self.assertEqual(self.backend.stored["savedBackgrounds"], [{"name": "sunset", "url": "u1"}])

    def test_ping_in_local_mode(self) -> None:
        code, out = self._run("ping")
        self.assertEqual(code, 0)
        self.assertIn("本地模式", out)


if __name__ == "__main__":
    unittest.main(verbosity=2)
