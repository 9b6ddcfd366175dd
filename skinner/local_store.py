"""本地配置存储

离线模式下代替 Pager Web API：SQLite 键值表，每个配置键一行，值为 JSON。
"""

import sqlite3
import json
from typing import Dict, Any

from .errors import TransportFailure
from .logger import get_logger

logger = get_logger('local_store')


class LocalConfigBackend:
    """SQLite 配置后端"""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.conn = None
        self.init_database()

    def get_connection(self) -> sqlite3.Connection:
        """获取数据库连接"""
        if self.conn is None:
            self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self.conn.row_factory = sqlite3.Row
        return self.conn

    def init_database(self):
        """初始化表结构"""
        conn = self.get_connection()
        conn.execute('''
            CREATE TABLE IF NOT EXISTS ui_config (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        ''')
        conn.commit()

    def get_config(self) -> Dict[str, Any]:
        """读取完整配置"""
        try:
            cursor = self.get_connection().cursor()
            cursor.execute('SELECT key, value FROM ui_config')
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"读取本地配置失败: {e}")
            raise TransportFailure(str(e)) from e

        config = {}
        for row in rows:
            try:
                config[row['key']] = json.loads(row['value'])
            except ValueError:
                logger.warning(f"跳过无法解析的配置项: {row['key']}")
        return config

    def set_config(self, config: Dict[str, Any]):
        """覆盖写入完整配置（单个事务）"""
        conn = self.get_connection()
        try:
            with conn:
                conn.execute('DELETE FROM ui_config')
                conn.executemany(
                    'INSERT INTO ui_config (key, value) VALUES (?, ?)',
                    [(key, json.dumps(value, ensure_ascii=False))
                     for key, value in config.items()]
                )
        except (sqlite3.Error, TypeError, ValueError) as e:
            logger.error(f"写入本地配置失败: {e}")
            raise TransportFailure(str(e)) from e

    def close(self):
        """关闭数据库连接"""
        if self.conn:
            self.conn.close()
            self.conn = None
