from __future__ import annotations

import json
import os
import tempfile

os.environ.setdefault("SKINNER_LOG_DIR", os.path.join(tempfile.gettempdir(), "skinner-test-logs"))

from skinner.assets import encode_data_uri  # noqa: E402
from skinner.errors import TransportFailure  # noqa: E402
from skinner.renderer import ThemeRenderer  # noqa: E402


class MemoryBackend:
    """In-memory config backend; stores JSON text so callers never share objects."""

    def __init__(self, config=None):
        self.data = json.dumps(config or {})
        self.get_calls = 0
        self.set_calls = 0
        self.fail_reads = False
        self.fail_writes = False
        # Called once, after the next read has taken its snapshot.
        self.on_get = None

    def get_config(self):
        self.get_calls += 1
        if self.fail_reads:
            raise TransportFailure("offline")
        config = json.loads(self.data)
        if self.on_get is not None:
            hook, self.on_get = self.on_get, None
            hook()
        return config

    def set_config(self, config):
        if self.fail_writes:
            raise TransportFailure("unauthenticated")
        self.set_calls += 1
        self.data = json.dumps(config)

    @property
    def stored(self):
        return json.loads(self.data)


class RecordingRenderer(ThemeRenderer):
    def __init__(self):
        self.calls = []

    def render_background(self, kind, value):
        self.calls.append(("background", kind, value))

    def render_pager_color(self, color):
        self.calls.append(("pager_color", color))

    def render_pager_skin(self, url):
        self.calls.append(("pager_skin", url))


def data_uri_of_size(size: int) -> str:
    return encode_data_uri(b"\x00" * size, "image/png")
