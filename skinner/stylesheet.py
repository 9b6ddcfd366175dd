"""样式生成

根据解析后的主题生成 Qt 样式表，以及重新着色 Pager 矢量图形
"""

import re
import xml.etree.ElementTree as ET

from .logger import get_logger

logger = get_logger('stylesheet')

SVG_NS = 'http://www.w3.org/2000/svg'
XLINK_NS = 'http://www.w3.org/1999/xlink'

# 需要重新着色的形状元素
SHAPE_TAGS = ('path', 'rect', 'circle', 'polygon', 'ellipse')

ET.register_namespace('', SVG_NS)
ET.register_namespace('xlink', XLINK_NS)

_FILL_DECLARATION = re.compile(r'(^|;)\s*fill\s*:[^;]*', re.IGNORECASE)


def background_stylesheet(color: str, object_name: str = 'pageRoot') -> str:
    """纯色背景样式"""
    return f"""
QWidget#{object_name} {{
    background-color: {color};
    background-image: none;
}}
"""


def _local_name(tag: str) -> str:
    return tag.rsplit('}', 1)[-1]


def _with_fill(style: str, color: str) -> str:
    """替换 style 中的 fill 声明"""
    rest = _FILL_DECLARATION.sub(r'\1', style).strip().strip(';').strip()
    return f"{rest};fill:{color}" if rest else f"fill:{color}"


def recolor_svg(svg_text: str, color: str) -> str:
    """将 SVG 中所有形状的填充色设置为指定颜色

    与行内样式一致：写入 style 的 fill，覆盖原有 fill 属性

    Args:
        svg_text: SVG 源文本
        color: 填充色

    Returns:
        重新着色后的 SVG，解析失败时原样返回
    """
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        logger.warning(f"SVG 解析失败，跳过着色: {e}")
        return svg_text

    for element in root.iter():
        if _local_name(element.tag) in SHAPE_TAGS:
            element.set('style', _with_fill(element.get('style', ''), color))

    return ET.tostring(root, encoding='unicode')


class StylesheetGenerator:
    """皮肤面板样式生成器"""

    COLORS = {
        'bg': '#1e1e1e',
        'card_bg': '#2a2a2a',
        'border': '#333333',
        'text': '#ffffff',
        'text_secondary': '#888888',
        'accent': '#007acc',
        'error': '#ff5252',
        'success': '#00ffaa',
    }

    def __init__(self):
        self._cache = None

    def generate(self) -> str:
        """生成面板样式表"""
        if self._cache is None:
            self._cache = self._generate_stylesheet(self.COLORS)
        return self._cache

    def _generate_stylesheet(self, c: dict) -> str:
        return f"""
QWidget#skinnerPanel {{
    background-color: {c['bg']};
    color: {c['text']};
    font-size: 13px;
}}

QListWidget {{
    background-color: {c['card_bg']};
    border: 1px solid {c['border']};
    border-radius: 6px;
}}

QPushButton {{
    border: none;
    border-radius: 6px;
    padding: 8px 14px;
    font-weight: 600;
    color: {c['text']};
    background-color: {c['accent']};
}}

QPushButton#btnUnapply, QPushButton#btnDelete, QPushButton#btnClose {{
    background-color: {c['error']};
}}

QPushButton:disabled {{
    background-color: {c['border']};
    color: {c['text_secondary']};
}}

QLabel#hint {{
    color: {c['text_secondary']};
    font-size: 11px;
}}
"""
