"""皮肤会话

一个界面实例对应一个会话：持有两个资源库、最近一次配置快照和"正在更新"标记。
每次修改完成后，用 patch 的返回值刷新资源库、重新渲染主题并通知监听者。
"""

from contextlib import contextmanager
from typing import Callable, Dict, Any, List, Optional

from . import assets
from .bridge import ImportExportBridge
from .errors import InvalidAsset, UpdateInProgress
from .library import AssetLibrary, BACKGROUND, PAGER, LIBRARY_KINDS, LibraryKind
from .logger import get_logger
from .renderer import NullRenderer
from .resolver import ThemeResolver, ResolvedTheme

logger = get_logger('session')


class SkinnerSession:
    """皮肤会话"""

    def __init__(self, store, renderer=None):
        self.store = store
        self.renderer = renderer or NullRenderer()
        self.resolver = ThemeResolver()
        self.bridge = ImportExportBridge(store)
        self.libraries = {
            BACKGROUND.name: AssetLibrary(BACKGROUND, store),
            PAGER.name: AssetLibrary(PAGER, store),
        }

        self.config = {}
        self.theme = None
        self._updating = False
        self._listeners = []

    @property
    def background(self) -> AssetLibrary:
        return self.libraries[BACKGROUND.name]

    @property
    def pager(self) -> AssetLibrary:
        return self.libraries[PAGER.name]

    @property
    def busy(self) -> bool:
        """是否有修改尚未完成"""
        return self._updating

    def library(self, kind) -> AssetLibrary:
        """按类型获取资源库

        Args:
            kind: LibraryKind 或其名称（background / pager）
        """
        name = kind.name if isinstance(kind, LibraryKind) else kind
        if name not in LIBRARY_KINDS:
            raise KeyError(f"未知的资源库类型: {name}")
        return self.libraries[name]

    def add_listener(self, callback: Callable[[Dict[str, Any]], None]):
        """注册配置变化回调"""
        self._listeners.append(callback)

    # ==================== 加载与渲染 ====================

    def refresh(self, config: Dict[str, Any]) -> ResolvedTheme:
        """用新的配置快照刷新资源库并重新渲染"""
        self.config = config
        for library in self.libraries.values():
            library.load(config)
        self.theme = self.resolver.apply(config, self.renderer)
        for callback in self._listeners:
            callback(config)
        return self.theme

    def load_and_apply(self) -> ResolvedTheme:
        """读取存储中的配置并应用

        与修改操作共用修改保护，加载期间的修改会被拒绝
        """
        logger.info("加载配置并应用主题")
        with self._update('load'):
            return self.refresh(self.store.get())

    def reapply(self, refetch: bool = True) -> ResolvedTheme:
        """重新渲染（例如 Pager 图形加载完成后）"""
        if refetch:
            return self.load_and_apply()
        self.theme = self.resolver.apply(self.config, self.renderer)
        return self.theme

    def preview_color(self, kind, color: str):
        """实时预览颜色，不保存"""
        if self.library(kind).kind is BACKGROUND:
            self.renderer.render_background('color', color)
        else:
            self.renderer.render_pager_color(color)

    # ==================== 修改操作 ====================

    @contextmanager
    def _update(self, action: str):
        """修改保护：上一次修改完成前不允许开始新的修改"""
        if self._updating:
            raise UpdateInProgress(f"上一次修改尚未完成，已忽略: {action}")
        self._updating = True
        try:
            yield
        finally:
            self._updating = False

    def _mutate(self, action: str, operation: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
        with self._update(action):
            updated = operation()
            self.refresh(updated)
        return updated

    def add(self, kind, name: str, url: str) -> Dict[str, Any]:
        library = self.library(kind)
        return self._mutate('add', lambda: library.add(name, url))

    def add_file(self, kind, name: str, file_path: str) -> Dict[str, Any]:
        """上传图片

        文件读取在修改保护之外进行，多个上传之间互不影响
        """
        library = self.library(kind)
        if not name:
            raise InvalidAsset("缺少资源名称")
        url = assets.read_upload(file_path, library.max_size)
        return self._mutate('upload', lambda: library.add(name, url))

    def toggle(self, kind, name: str) -> Dict[str, Any]:
        library = self.library(kind)
        return self._mutate('toggle', lambda: library.toggle(name))

    def remove(self, kind, index: int) -> Dict[str, Any]:
        library = self.library(kind)
        return self._mutate('remove', lambda: library.remove(index))

    def set_color(self, kind, color: str) -> Dict[str, Any]:
        library = self.library(kind)
        return self._mutate('set_color', lambda: library.set_color(color))

    def reset(self, kind) -> Dict[str, Any]:
        library = self.library(kind)
        return self._mutate('reset', library.reset)

    def import_document(self, document: str) -> Dict[str, Any]:
        return self._mutate('import', lambda: self.bridge.import_document(document))

    def import_file(self, file_path: str) -> Dict[str, Any]:
        return self._mutate('import', lambda: self.bridge.import_file(file_path))

    def export(self) -> str:
        return self.bridge.export()

    def export_to_file(self, file_path: Optional[str] = None) -> str:
        if file_path:
            return self.bridge.export_to_file(file_path)
        return self.bridge.export_to_file()

    def describe(self) -> List[str]:
        """当前状态的文字描述（命令行使用）"""
        lines = []
        theme = self.theme or self.resolver.resolve(self.config)
        lines.append(f"背景: {theme.background.kind} {_short(theme.background.value)}")
        lines.append(f"Pager: {theme.pager.kind} {_short(theme.pager.value)}")
        for library in self.libraries.values():
            lines.append(f"[{library.kind.name}] 已应用: {library.active_name or '(无)'}")
            for i, item in enumerate(library.items):
                mark = '*' if library.is_active(item['name']) else ' '
                lines.append(f"  {mark} {i}: {item['name']}  {_short(item.get('url', ''))}")
        return lines


def _short(value: str, limit: int = 48) -> str:
    return value if len(value) <= limit else value[:limit] + '...'
