"""Qt 主题渲染器

render_* 可以在工作线程中调用：通过信号交给主线程更新控件，
远程图片只在工作线程中下载。
"""

import logging

from PySide6.QtCore import QObject, Qt, Signal, Slot, QByteArray
from PySide6.QtGui import QPalette, QBrush, QPixmap, QPainter
from PySide6.QtSvg import QSvgRenderer
from PySide6.QtWidgets import QWidget, QLabel, QGridLayout

from skinner.assets import AssetCache, is_data_uri, load_asset_bytes
from skinner.renderer import ThemeRenderer
from skinner.stylesheet import background_stylesheet, recolor_svg

from .worker import WorkerThread

logger = logging.getLogger(__name__)


class PagerView(QWidget):
    """Pager 图形：矢量填充层 + 皮肤图片层 + 边框层"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName('pagerView')
        self.setFixedSize(240, 400)

        self._svg_text = ""
        self._skin_pixmap = None

        layout = QGridLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # 三层叠放在同一个格子中，后添加的在上层
        self.fill_label = QLabel()
        self.image_label = QLabel()
        self.border_label = QLabel()
        for label in (self.fill_label, self.image_label, self.border_label):
            label.setAlignment(Qt.AlignCenter)
            label.setAttribute(Qt.WA_TransparentForMouseEvents)
            layout.addWidget(label, 0, 0)
        self.image_label.hide()

    @property
    def loaded(self) -> bool:
        return bool(self._svg_text)

    def load_graphics(self, svg_bytes: bytes, border_bytes: bytes = b""):
        """加载 Pager 矢量图形和边框图片"""
        self._svg_text = svg_bytes.decode('utf-8', errors='replace')
        if border_bytes:
            border = QPixmap()
            if border.loadFromData(border_bytes):
                self.border_label.setPixmap(
                    border.scaled(self.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation)
                )
        logger.info("Pager 图形已加载")

    def show_color(self, color: str):
        """显示矢量图形并着色"""
        if not self.loaded:
            return
        svg = recolor_svg(self._svg_text, color)
        renderer = QSvgRenderer(QByteArray(svg.encode('utf-8')))
        pixmap = QPixmap(self.size())
        pixmap.fill(Qt.transparent)
        painter = QPainter(pixmap)
        renderer.render(painter)
        painter.end()

        self.fill_label.setPixmap(pixmap)
        self.fill_label.show()
        self.border_label.show()
        self.image_label.hide()

    def show_skin(self, pixmap: QPixmap):
        """隐藏矢量图形和边框，显示皮肤图片"""
        if not self.loaded:
            return
        self.image_label.setPixmap(
            pixmap.scaled(self.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation)
        )
        self.fill_label.hide()
        self.border_label.hide()
        self.image_label.show()


class QtThemeRenderer(QObject, ThemeRenderer):
    """把解析结果应用到页面和 Pager 图形上

    render_* 只发出信号；图片在主线程中从缓存取出，
    远程图片在工作线程中下载，完成后如果仍在使用再显示。
    """

    _background_color = Signal(str)
    _background_image = Signal(str)
    _pager_color = Signal(str)
    _pager_skin = Signal(str)

    def __init__(self, page: QWidget = None, pager_view: PagerView = None, parent=None):
        super().__init__(parent)
        self.page = page
        self.pager_view = pager_view

        self._cache = AssetCache()
        self._in_use = {'background': None, 'pager': None}
        self._downloads = {}

        self._background_color.connect(self._apply_background_color)
        self._background_image.connect(self._apply_background_image)
        self._pager_color.connect(self._apply_pager_color)
        self._pager_skin.connect(self._apply_pager_skin)

    # ==================== ThemeRenderer ====================

    def render_background(self, kind: str, value: str):
        if kind == 'image':
            self._background_image.emit(value)
        else:
            self._background_color.emit(value)

    def render_pager_color(self, color: str):
        self._pager_color.emit(color)

    def render_pager_skin(self, url: str):
        self._pager_skin.emit(url)

    # ==================== 图片获取（主线程） ====================

    def _use(self, slot: str, url):
        self._in_use[slot] = url
        self._cache.retain(self._in_use.values())

    def _image_data(self, url: str) -> bytes:
        """从缓存取图片；data URI 直接解码，远程 URL 转到工作线程下载"""
        data = self._cache.get(url)
        if data is not None or not self._cache.needs_fetch(url):
            return data or b""

        self._cache.begin_fetch(url)
        if is_data_uri(url):
            data = load_asset_bytes(url)
            self._cache.finish_fetch(url, data)
            return data

        worker = WorkerThread(self._download, url)
        worker.finished.connect(self._on_downloaded)
        self._downloads[url] = worker
        worker.start()
        return b""

    @staticmethod
    def _download(url: str):
        return url, load_asset_bytes(url)

    @Slot(object)
    def _on_downloaded(self, result):
        if isinstance(result, Exception):
            logger.error(f"图片下载异常: {result}")
            self._downloads = {
                url: worker for url, worker in self._downloads.items() if worker.isRunning()
            }
            return

        url, data = result
        self._downloads.pop(url, None)
        in_use = url in self._in_use.values()
        if not self._cache.finish_fetch(url, data, in_use):
            return

        if self._in_use['background'] == url:
            self._show_background_image(data)
        if self._in_use['pager'] == url:
            self._show_pager_skin(data)

    # ==================== 主线程 ====================

    @Slot(str)
    def _apply_background_color(self, color: str):
        self._use('background', None)
        if self.page is None:
            return
        self.page.setAutoFillBackground(False)
        self.page.setAttribute(Qt.WA_StyledBackground, True)
        self.page.setStyleSheet(background_stylesheet(color, self.page.objectName() or 'pageRoot'))

    @Slot(str)
    def _apply_background_image(self, url: str):
        self._use('background', url)
        data = self._image_data(url)
        if data:
            self._show_background_image(data)

    def _show_background_image(self, data: bytes):
        if self.page is None:
            return
        pixmap = QPixmap()
        if not pixmap.loadFromData(data):
            logger.warning("背景图片无法解析，保持当前背景")
            return

        # 样式表背景会覆盖 palette，先清除
        self.page.setStyleSheet("")
        self.page.setAttribute(Qt.WA_StyledBackground, False)
        scaled = pixmap.scaled(self.page.size(), Qt.KeepAspectRatioByExpanding, Qt.SmoothTransformation)
        palette = self.page.palette()
        palette.setBrush(QPalette.Window, QBrush(scaled))
        self.page.setPalette(palette)
        self.page.setAutoFillBackground(True)

    @Slot(str)
    def _apply_pager_color(self, color: str):
        self._use('pager', None)
        if self.pager_view is None:
            return
        self.pager_view.show_color(color)

    @Slot(str)
    def _apply_pager_skin(self, url: str):
        self._use('pager', url)
        data = self._image_data(url)
        if data:
            self._show_pager_skin(data)

    def _show_pager_skin(self, data: bytes):
        if self.pager_view is None:
            return
        pixmap = QPixmap()
        if not pixmap.loadFromData(data):
            logger.warning("皮肤图片无法解析，保持当前 Pager 图形")
            return
        self.pager_view.show_skin(pixmap)
