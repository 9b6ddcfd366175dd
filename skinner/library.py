"""资源库

每种资源（背景 / Pager 皮肤）一个有序列表，加上一个"当前应用的资源名"。
同一时间最多只有一个资源处于应用状态：应用状态只保存为一个名字，
而不是每个资源上的标记。
"""

import copy
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Union

from . import assets
from .errors import InvalidAsset
from .logger import get_logger
from .validator import ConfigValidator

logger = get_logger('library')


@dataclass(frozen=True)
class LibraryKind:
    """资源库类型及其在配置中的键"""

    name: str
    items_key: str
    active_key: str
    color_key: str
    default_color: str


BACKGROUND = LibraryKind(
    name='background',
    items_key='savedBackgrounds',
    active_key='appliedBackgroundName',
    color_key='backgroundHex',
    default_color='#303030',
)

PAGER = LibraryKind(
    name='pager',
    items_key='savedPagerSkins',
    active_key='appliedPagerSkinName',
    color_key='pagerHex',
    default_color='#fff200',
)

LIBRARY_KINDS = {kind.name: kind for kind in (BACKGROUND, PAGER)}


@dataclass(frozen=True)
class NoSelection:
    """没有应用任何资源"""

    def to_name(self) -> str:
        return ""


@dataclass(frozen=True)
class ActiveAsset:
    """按名字引用的已应用资源"""

    name: str

    def to_name(self) -> str:
        return self.name


Selection = Union[NoSelection, ActiveAsset]


def selection_from_name(name: Any) -> Selection:
    if isinstance(name, str) and name:
        return ActiveAsset(name)
    return NoSelection()


def is_library_entry(item: Any) -> bool:
    return isinstance(item, dict) and isinstance(item.get('name'), str)


def library_items(config: Dict[str, Any], kind: LibraryKind) -> List[Dict[str, str]]:
    """从配置中取出资源列表，跳过格式错误的条目"""
    raw = config.get(kind.items_key)
    if not isinstance(raw, list):
        return []
    return [dict(item) for item in raw if is_library_entry(item)]


def find_asset(items: List[Dict[str, str]], name: str) -> Optional[Dict[str, str]]:
    """按名字查找资源（重名时返回第一个）"""
    for item in items:
        if item['name'] == name:
            return item
    return None


class AssetLibrary:
    """资源库

    所有修改都只发出一次 patch，随后用 patch 的返回值刷新本地视图，
    而不是使用修改前的本地状态。
    """

    def __init__(self, kind: LibraryKind, store, max_size: int = assets.MAX_ASSET_SIZE):
        self.kind = kind
        self.store = store
        self.max_size = max_size
        self._items = []
        self._selection = NoSelection()

    def load(self, config: Dict[str, Any]):
        """从配置快照刷新本地视图"""
        self._items = copy.deepcopy(library_items(config, self.kind))
        self._selection = selection_from_name(config.get(self.kind.active_key))

    @property
    def items(self) -> List[Dict[str, str]]:
        return list(self._items)

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def active_name(self) -> str:
        return self._selection.to_name()

    def find(self, name: str) -> Optional[Dict[str, str]]:
        return find_asset(self._items, name)

    def is_active(self, name: str) -> bool:
        return self._selection == ActiveAsset(name)

    def _commit(self, partial: Dict[str, Any]) -> Dict[str, Any]:
        updated = self.store.patch(partial)
        self.load(updated)
        return updated

    def _commit_from_snapshot(self, build) -> Dict[str, Any]:
        updated = self.store.update(build)
        self.load(updated)
        return updated

    def _stored_items(self, config: Dict[str, Any]) -> List[Any]:
        """存储中的原始资源列表（包括格式错误的条目）"""
        raw = config.get(self.kind.items_key)
        return list(raw) if isinstance(raw, list) else []

    def add(self, name: str, url: str) -> Dict[str, Any]:
        """添加资源

        Args:
            name: 资源名（不能为空，允许重名）
            url: data URI 或远程 URL

        Returns:
            更新后的配置
        """
        if not name:
            raise InvalidAsset("缺少资源名称")
        assets.check_size(assets.payload_size(url), self.max_size)

        # 以同一次读取到的最新列表为准追加
        def build(current):
            items = self._stored_items(current)
            items.append({'name': name, 'url': url})
            return {self.kind.items_key: items}

        updated = self._commit_from_snapshot(build)
        logger.info(f"已添加{self.kind.name}资源: {name}")
        return updated

    def toggle(self, name: str) -> Dict[str, Any]:
        """应用 / 取消应用

        已应用则取消；否则直接切换到该资源，无需先取消之前的资源
        """
        new_selection = NoSelection() if self.is_active(name) else ActiveAsset(name)
        updated = self._commit({self.kind.active_key: new_selection.to_name()})
        logger.info(f"{self.kind.name} 当前应用: {new_selection.to_name() or '(无)'}")
        return updated

    def remove(self, index: int) -> Dict[str, Any]:
        """删除列表中第 index 个资源（按 items 的顺序）

        只删除这一个条目，存储中格式错误的条目原样保留；
        删除的资源正在应用时，在同一次 patch 中清除应用状态
        """
        removed = {}

        def build(current):
            items = self._stored_items(current)
            positions = [i for i, item in enumerate(items) if is_library_entry(item)]
            if not 0 <= index < len(positions):
                raise IndexError(f"资源索引超出范围: {index}")

            removed.update(items.pop(positions[index]))
            partial = {self.kind.items_key: items}
            if selection_from_name(current.get(self.kind.active_key)) == ActiveAsset(removed['name']):
                partial[self.kind.active_key] = ""
            return partial

        updated = self._commit_from_snapshot(build)
        logger.info(f"已删除{self.kind.name}资源: {removed['name']}")
        return updated

    def set_color(self, color: str) -> Dict[str, Any]:
        """设置纯色，同时取消已应用的资源"""
        if not ConfigValidator.is_color(color):
            raise ValueError(f"无效的颜色格式: {color!r}")
        return self._commit({self.kind.color_key: color, self.kind.active_key: ""})

    def reset(self) -> Dict[str, Any]:
        """恢复默认颜色，同时取消已应用的资源"""
        return self._commit({
            self.kind.color_key: self.kind.default_color,
            self.kind.active_key: "",
        })
