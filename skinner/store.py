"""配置存储客户端

get() 读取完整配置，patch() 在客户端完成 读取-合并-写入。
没有版本号：并发的 patch 以最后一次写入为准，先读后写的 patch
会丢掉在它读取之后、写入之前发生的其他写入（仅限它自己没有设置的键）。
"""

from typing import Callable, Dict, Any

from .errors import TransportFailure
from .logger import get_logger

logger = get_logger('store')


class ConfigStore:
    """配置存储客户端

    backend 需提供 get_config() -> dict 和 set_config(dict)，
    失败时抛出 TransportFailure。
    """

    def __init__(self, backend):
        self.backend = backend

    def get(self) -> Dict[str, Any]:
        """读取完整配置，任何传输失败都视为空配置"""
        try:
            config = self.backend.get_config()
        except TransportFailure as e:
            logger.warning(f"读取配置失败，按空配置处理: {e}")
            return {}

        if not isinstance(config, dict):
            logger.warning(f"配置格式错误，按空配置处理: {type(config).__name__}")
            return {}
        return config

    def patch(self, partial: Dict[str, Any]) -> Dict[str, Any]:
        """合并写入

        Args:
            partial: 需要更新的键；同名键整体替换，其余键保留

        Returns:
            合并后的配置（写入失败时同样返回，供本地立即使用）
        """
        return self.update(lambda current: partial)

    def update(self, build: Callable[[Dict[str, Any]], Dict[str, Any]]) -> Dict[str, Any]:
        """基于同一次读取的快照计算并合并写入

        build(current) 返回需要更新的键；它抛出的异常原样向上传递，不会写入
        """
        current = self.get()
        partial = build(current)
        merged = {**current, **partial}
        try:
            self.backend.set_config(merged)
            logger.debug(f"配置已更新: {', '.join(partial) or '(无变化)'}")
        except TransportFailure as e:
            logger.warning(f"写入配置失败，已丢弃: {e}")
        return merged


def create_store(settings=None) -> ConfigStore:
    """按设置创建配置存储（http 使用 Pager Web API，local 使用本地 SQLite）"""
    from .settings import get_settings
    settings = settings or get_settings()

    backend_name = settings.get('backend', 'http')
    if backend_name == 'local':
        from .local_store import LocalConfigBackend
        logger.info(f"使用本地配置存储: {settings.local_db_path}")
        return ConfigStore(LocalConfigBackend(settings.local_db_path))

    from .api_client import ApiClient
    logger.info(f"使用 Pager Web API: {settings.api_url}")
    return ConfigStore(ApiClient(settings))
