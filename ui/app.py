"""主应用程序"""

from PySide6.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QVBoxLayout
from PySide6.QtCore import Qt, QTimer

import sys
import os
import logging
logger = logging.getLogger(__name__)

from skinner.settings import get_settings, get_base_dir
from skinner.store import create_store
from skinner.session import SkinnerSession
from skinner.errors import TransportFailure

from .renderer import PagerView, QtThemeRenderer
from .skinner_panel import SkinnerPanel
from .worker import WorkerThread

# Pager 图形文件名（Web API 的 getimage 名称，离线模式下放在 media/ 目录）
PAGER_FILL_IMAGE = 'pager-fill.svg'
PAGER_BORDER_IMAGE = 'pager-border.png'


class MainWindow(QMainWindow):
    """主窗口：左侧页面预览，右侧皮肤设置面板"""

    def __init__(self):
        super().__init__()

        self.settings = get_settings()
        self.store = create_store(self.settings)
        self.worker = None
        self.graphics_worker = None

        self.setup_ui()

        self.renderer = QtThemeRenderer(self.page, self.pager_view, self)
        self.session = SkinnerSession(self.store, self.renderer)
        self.panel = SkinnerPanel(self.session)
        self.main_layout.addWidget(self.panel)

        # 首次加载完成前不接受修改
        self.panel.setEnabled(False)
        self.startup()

    def setup_ui(self):
        """设置界面"""
        self.setWindowTitle("Pager Skinner")
        self.resize(960, 640)

        central = QWidget()
        self.setCentralWidget(central)
        self.main_layout = QHBoxLayout(central)
        self.main_layout.setContentsMargins(0, 0, 0, 0)
        self.main_layout.setSpacing(0)

        self.page = QWidget()
        self.page.setObjectName('pageRoot')
        page_layout = QVBoxLayout(self.page)
        self.pager_view = PagerView()
        page_layout.addWidget(self.pager_view, 0, Qt.AlignCenter)
        self.main_layout.addWidget(self.page, 1)

    def startup(self):
        """启动：先应用已保存的主题，再加载 Pager 图形"""
        self.worker = WorkerThread(self.session.load_and_apply)
        self.worker.finished.connect(self._on_loaded)
        self.worker.start()

    def _on_loaded(self, result):
        self.panel.setEnabled(True)
        if isinstance(result, Exception):
            logger.error(f"加载配置失败: {result}")
        self.graphics_worker = WorkerThread(self._fetch_pager_graphics)
        self.graphics_worker.finished.connect(self._on_graphics_loaded)
        self.graphics_worker.start()

    def _fetch_pager_graphics(self):
        """获取 Pager 图形：Web API 优先，失败时读取 media/ 目录"""
        if self.settings.get('backend') == 'http':
            client = self.store.backend
            if not self.settings.get('serverid'):
                client.ping()
            try:
                return client.fetch_image(PAGER_FILL_IMAGE), client.fetch_image(PAGER_BORDER_IMAGE)
            except TransportFailure as e:
                logger.warning(f"下载 Pager 图形失败: {e}")

        media_dir = os.path.join(get_base_dir(), 'media')
        fill_path = os.path.join(media_dir, PAGER_FILL_IMAGE)
        border_path = os.path.join(media_dir, PAGER_BORDER_IMAGE)
        if not os.path.exists(fill_path):
            logger.info("未找到 Pager 图形，仅渲染背景")
            return None

        with open(fill_path, 'rb') as f:
            fill = f.read()
        border = b""
        if os.path.exists(border_path):
            with open(border_path, 'rb') as f:
                border = f.read()
        return fill, border

    def _on_graphics_loaded(self, result):
        if isinstance(result, Exception):
            logger.error(f"加载 Pager 图形失败: {result}")
            return
        if not result:
            return
        self.pager_view.load_graphics(*result)
        # 图形出现后重新应用一次 Pager 主题
        self.session.reapply(refetch=False)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        # 背景图片按新尺寸重新缩放
        session = getattr(self, 'session', None)
        if session is not None and session.theme is not None and not session.busy:
            QTimer.singleShot(0, lambda: session.reapply(refetch=False))


def main():
    from PySide6.QtWidgets import QApplication

    app = QApplication(sys.argv)
    app.setApplicationName("Pager Skinner")
    app.setOrganizationName("PagerSkinner")

    window = MainWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
