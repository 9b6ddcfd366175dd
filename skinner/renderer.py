"""主题渲染接口

渲染器负责把解析结果应用到页面上。实现必须是幂等的，
目标控件尚未创建时（例如 Pager 图形还没加载）直接忽略。
"""


class ThemeRenderer:
    """主题渲染器基类"""

    def render_background(self, kind: str, value: str):
        """渲染页面背景

        Args:
            kind: "color" 或 "image"
            value: 颜色值或图片 URL
        """
        raise NotImplementedError

    def render_pager_color(self, color: str):
        """显示矢量 Pager 图形并设置填充色"""
        raise NotImplementedError

    def render_pager_skin(self, url: str):
        """隐藏矢量图形，显示皮肤图片"""
        raise NotImplementedError


class NullRenderer(ThemeRenderer):
    """不渲染任何内容（命令行模式使用）"""

    def render_background(self, kind: str, value: str):
        pass

    def render_pager_color(self, color: str):
        pass

    def render_pager_skin(self, url: str):
        pass
