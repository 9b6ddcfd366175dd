"""配置导入 / 导出

导出为完整配置的 JSON 文档；导入时按键合并到现有配置，
导入文件中没有的键保持不变。
"""

import json
from typing import Dict, Any

from .errors import InvalidImportFormat
from .logger import get_logger
from .validator import ConfigValidator

logger = get_logger('bridge')

DEFAULT_EXPORT_NAME = 'skinner_config.json'


class ImportExportBridge:
    """配置导入导出"""

    def __init__(self, store):
        self.store = store

    def export(self) -> str:
        """导出当前配置为 JSON 文本"""
        return json.dumps(self.store.get(), ensure_ascii=False, indent=2)

    def export_to_file(self, file_path: str = DEFAULT_EXPORT_NAME) -> str:
        """导出到文件

        Returns:
            写入的文件路径
        """
        document = self.export()
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(document)
        logger.info(f"配置已导出: {file_path}")
        return file_path

    def parse(self, document: str) -> Dict[str, Any]:
        """解析并验证导入文档，不修改存储"""
        try:
            config = json.loads(document)
        except ValueError as e:
            raise InvalidImportFormat(f"无效的 JSON 文件: {e}") from e

        valid, errors = ConfigValidator.validate(config)
        if not valid:
            raise InvalidImportFormat("配置格式错误: " + "; ".join(errors))

        warnings = ConfigValidator.shape_warnings(config) + ConfigValidator.color_warnings(config)
        for warning in warnings:
            logger.warning(warning)
        return config

    def import_document(self, document: str) -> Dict[str, Any]:
        """导入配置

        Returns:
            合并后的配置
        """
        config = self.parse(document)
        updated = self.store.patch(config)
        logger.info(f"配置已导入: {len(config)} 个键")
        return updated

    def import_file(self, file_path: str) -> Dict[str, Any]:
        """从文件导入配置"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                document = f.read()
        except UnicodeDecodeError as e:
            raise InvalidImportFormat(f"无法读取文件编码: {e}") from e
        return self.import_document(document)
