"""配置验证器

检查导入的配置文件和颜色值的格式
"""

import re
from typing import Dict, Any, List, Tuple


class ConfigValidator:
    """配置验证器"""

    # 颜色字段
    COLOR_FIELDS = ['backgroundHex', 'pagerHex']

    # 资源库字段
    LIBRARY_FIELDS = ['savedBackgrounds', 'savedPagerSkins']

    # 当前应用的资源名字段
    ACTIVE_FIELDS = ['appliedBackgroundName', 'appliedPagerSkinName']

    # 颜色格式正则
    COLOR_PATTERN = re.compile(r'^#[0-9A-Fa-f]{6}$|^#[0-9A-Fa-f]{8}$|^rgba?\([^)]+\)$')

    @classmethod
    def is_color(cls, value: Any) -> bool:
        """是否为合法的颜色值"""
        return isinstance(value, str) and bool(cls.COLOR_PATTERN.match(value))

    @classmethod
    def validate(cls, config: Any) -> Tuple[bool, List[str]]:
        """验证配置结构

        只有非 JSON 对象才视为无效；已知字段的类型问题见 shape_warnings

        Args:
            config: 解析后的配置

        Returns:
            (是否有效, 错误信息列表)
        """
        if not isinstance(config, dict):
            return False, [f"配置必须是 JSON 对象，实际为 {type(config).__name__}"]
        return True, []

    @classmethod
    def shape_warnings(cls, config: Dict[str, Any]) -> List[str]:
        """已知字段类型不符时返回提示（不阻止导入，解析主题时会回退到默认值）"""
        warnings = []

        for field in cls.COLOR_FIELDS + cls.ACTIVE_FIELDS:
            value = config.get(field)
            if value is not None and not isinstance(value, str):
                warnings.append(f"'{field}' 应为字符串")

        for field in cls.LIBRARY_FIELDS:
            if field in config:
                cls._check_library(config[field], field, warnings)

        return warnings

    @classmethod
    def _check_library(cls, items: Any, path: str, warnings: List[str]):
        """检查资源列表"""
        if not isinstance(items, list):
            warnings.append(f"'{path}' 应为列表")
            return

        for i, item in enumerate(items):
            if not isinstance(item, dict):
                warnings.append(f"{path}[{i}] 应为对象，将被忽略")
                continue
            for key in ('name', 'url'):
                if not isinstance(item.get(key), str):
                    warnings.append(f"{path}[{i}].{key} 应为字符串")

    @classmethod
    def color_warnings(cls, config: Dict[str, Any]) -> List[str]:
        """颜色格式不规范时返回提示（不阻止导入）"""
        warnings = []
        for field in cls.COLOR_FIELDS:
            value = config.get(field)
            if isinstance(value, str) and value and not cls.is_color(value):
                warnings.append(f"无效的颜色格式: {field} = '{value}'")
        return warnings
