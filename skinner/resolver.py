"""主题解析

根据配置快照决定背景和 Pager 皮肤使用自定义资源还是纯色：

1. 当前应用的资源名非空，且资源库中存在同名资源 → 使用资源的 url
2. 否则使用颜色（未设置时为默认色）

应用的资源已被删除时静默回退到颜色，不视为错误。
"""

from dataclasses import dataclass
from typing import Dict, Any

from .library import BACKGROUND, PAGER, LibraryKind, find_asset, library_items
from .logger import get_logger

logger = get_logger('resolver')


@dataclass(frozen=True)
class BackgroundVisual:
    kind: str    # color | image
    value: str


@dataclass(frozen=True)
class PagerVisual:
    kind: str    # color | skin
    value: str


@dataclass(frozen=True)
class ResolvedTheme:
    background: BackgroundVisual
    pager: PagerVisual


def _color(config: Dict[str, Any], kind: LibraryKind) -> str:
    value = config.get(kind.color_key)
    if isinstance(value, str) and value:
        return value
    return kind.default_color


def _active_url(config: Dict[str, Any], kind: LibraryKind):
    """已应用资源的 url，没有或找不到时返回 None"""
    active_name = config.get(kind.active_key)
    if not isinstance(active_name, str) or not active_name:
        return None

    asset = find_asset(library_items(config, kind), active_name)
    if asset is None:
        logger.debug(f"{kind.active_key} 指向不存在的资源 '{active_name}'，回退到颜色")
        return None

    url = asset.get('url')
    return url if isinstance(url, str) and url else None


class ThemeResolver:
    """主题解析器"""

    def resolve(self, config: Dict[str, Any]) -> ResolvedTheme:
        """解析配置快照

        Args:
            config: 完整配置（可以为空）

        Returns:
            背景和 Pager 的渲染指令
        """
        bg_url = _active_url(config, BACKGROUND)
        if bg_url is not None:
            background = BackgroundVisual('image', bg_url)
        else:
            background = BackgroundVisual('color', _color(config, BACKGROUND))

        skin_url = _active_url(config, PAGER)
        if skin_url is not None:
            pager = PagerVisual('skin', skin_url)
        else:
            pager = PagerVisual('color', _color(config, PAGER))

        return ResolvedTheme(background, pager)

    def apply(self, config: Dict[str, Any], renderer) -> ResolvedTheme:
        """解析并渲染

        每次调用恰好发出一次背景渲染和一次 Pager 渲染
        """
        theme = self.resolve(config)
        renderer.render_background(theme.background.kind, theme.background.value)
        if theme.pager.kind == 'skin':
            renderer.render_pager_skin(theme.pager.value)
        else:
            renderer.render_pager_color(theme.pager.value)
        return theme
