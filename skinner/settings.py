"""应用设置

settings.json 位于 exe 同级目录（开发模式下为项目根目录），
保存时只更新传入的字段，其余字段原样保留。
"""

import json
import os
import sys
from typing import Dict, Any, Optional

from .logger import get_logger, set_log_level

logger = get_logger('settings')


DEFAULT_SETTINGS = {
    'backend': 'http',          # http | local
    'host': '127.0.0.1',
    'api_port': 4040,
    'api_path': '/cgi-bin/api.sh',
    'web_port': 80,
    'ping_path': '/api/api_ping',
    'serverid': '',
    'token': '',
    'timeout': 10,
    'local_db': 'skinner.db',
    'log_level': 'DEBUG',
}


def get_base_dir() -> str:
    """获取基础目录（exe 所在目录）"""
    if getattr(sys, 'frozen', False):
        return os.path.dirname(sys.executable)
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class AppSettings:
    """应用设置"""

    def __init__(self, path: Optional[str] = None):
        self.path = path or os.path.join(get_base_dir(), 'settings.json')
        self._values = dict(DEFAULT_SETTINGS)
        self.reload()

    def reload(self):
        """从文件重新加载设置"""
        self._values = dict(DEFAULT_SETTINGS)
        self._values.update(self._read_file())

    def _read_file(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"读取设置失败，使用默认值: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"设置文件格式错误: {self.path}")
            return {}
        return data

    def get(self, key: str, default=None):
        return self._values.get(key, default)

    def __getitem__(self, key: str):
        return self._values[key]

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def save(self, **updates) -> bool:
        """保存设置（只更新传入的字段）

        Returns:
            是否保存成功
        """
        self._values.update(updates)
        try:
            existing = self._read_file()
            existing.update(updates)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(existing, f, ensure_ascii=False, indent=2)
            logger.info(f"设置已保存: {', '.join(updates)}")
            return True
        except OSError as e:
            logger.error(f"保存设置失败: {e}")
            return False

    @property
    def api_url(self) -> str:
        return f"http://{self['host']}:{self['api_port']}{self['api_path']}"

    @property
    def ping_url(self) -> str:
        return f"http://{self['host']}:{self['web_port']}{self['ping_path']}"

    @property
    def local_db_path(self) -> str:
        db_path = self['local_db']
        if os.path.isabs(db_path):
            return db_path
        return os.path.join(get_base_dir(), db_path)

    def apply_log_level(self):
        """按 log_level 设置日志级别，无效值保持原级别"""
        try:
            set_log_level(self.get('log_level') or 'DEBUG')
        except ValueError as e:
            logger.warning(f"{e}，保持当前日志级别")


_settings_instance = None


def get_settings() -> AppSettings:
    """获取应用设置单例"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = AppSettings()
        _settings_instance.apply_log_level()
    return _settings_instance
