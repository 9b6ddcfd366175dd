"""Pager 皮肤管理

配置同步、资源库状态和主题解析
"""

from .errors import (
    SkinnerError,
    TransportFailure,
    AssetTooLarge,
    InvalidImportFormat,
    InvalidAsset,
    UpdateInProgress,
)
from .store import ConfigStore, create_store
from .library import AssetLibrary, BACKGROUND, PAGER, NoSelection, ActiveAsset
from .resolver import ThemeResolver, ResolvedTheme, BackgroundVisual, PagerVisual
from .renderer import ThemeRenderer, NullRenderer
from .bridge import ImportExportBridge
from .session import SkinnerSession

__all__ = [
    'SkinnerError',
    'TransportFailure',
    'AssetTooLarge',
    'InvalidImportFormat',
    'InvalidAsset',
    'UpdateInProgress',
    'ConfigStore',
    'create_store',
    'AssetLibrary',
    'BACKGROUND',
    'PAGER',
    'NoSelection',
    'ActiveAsset',
    'ThemeResolver',
    'ResolvedTheme',
    'BackgroundVisual',
    'PagerVisual',
    'ThemeRenderer',
    'NullRenderer',
    'ImportExportBridge',
    'SkinnerSession',
]
