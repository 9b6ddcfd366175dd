"""皮肤设置面板"""

import logging

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QLineEdit,
    QListWidget, QListWidgetItem, QTabWidget, QColorDialog, QFileDialog,
    QMessageBox
)

from skinner.assets import MAX_ASSET_SIZE
from skinner.bridge import DEFAULT_EXPORT_NAME
from skinner.errors import SkinnerError
from skinner.library import BACKGROUND, PAGER
from skinner.stylesheet import StylesheetGenerator

from .worker import WorkerThread

logger = logging.getLogger(__name__)


class SkinnerPanel(QWidget):
    """背景 / Pager 皮肤设置面板"""

    config_changed = Signal(dict)

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.setObjectName('skinnerPanel')
        self.session = session
        self.worker = None
        self.tabs = {}

        self.setup_ui()
        self.setStyleSheet(StylesheetGenerator().generate())

        # 监听回调可能在工作线程中执行，通过信号回到主线程
        self.session.add_listener(self.config_changed.emit)
        self.config_changed.connect(self.render_libraries)

    def setup_ui(self):
        """设置界面"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        title = QLabel("Pager 皮肤设置")
        title.setStyleSheet("font-size: 18px; font-weight: 600;")
        layout.addWidget(title)

        io_row = QHBoxLayout()
        import_btn = QPushButton("导入")
        import_btn.clicked.connect(self._import_config)
        export_btn = QPushButton("导出")
        export_btn.clicked.connect(self._export_config)
        io_row.addWidget(import_btn)
        io_row.addWidget(export_btn)
        layout.addLayout(io_row)

        tab_widget = QTabWidget()
        tab_widget.addTab(self._create_library_tab(BACKGROUND, "背景"), "背景")
        tab_widget.addTab(self._create_library_tab(PAGER, "Pager 皮肤"), "Pager")
        layout.addWidget(tab_widget, 1)

    def _create_library_tab(self, kind, label: str) -> QWidget:
        """创建一种资源库的设置页"""
        page = QWidget()
        layout = QVBoxLayout(page)

        color_row = QHBoxLayout()
        color_btn = QPushButton(kind.default_color)
        color_btn.clicked.connect(lambda: self._choose_color(kind))
        reset_btn = QPushButton("恢复默认")
        reset_btn.setObjectName('btnUnapply')
        reset_btn.clicked.connect(lambda: self._run(self.session.reset, kind))
        color_row.addWidget(QLabel("颜色"))
        color_row.addWidget(color_btn, 1)
        color_row.addWidget(reset_btn)
        layout.addLayout(color_row)

        upload_title = QLabel(f"上传{label}")
        hint = QLabel(f"(最大 {MAX_ASSET_SIZE // 1024}KB)")
        hint.setObjectName('hint')
        title_row = QHBoxLayout()
        title_row.addWidget(upload_title)
        title_row.addWidget(hint)
        title_row.addStretch()
        layout.addLayout(title_row)

        upload_row = QHBoxLayout()
        name_input = QLineEdit()
        name_input.setPlaceholderText("名称")
        upload_btn = QPushButton("选择图片并上传")
        upload_btn.clicked.connect(lambda: self._upload(kind))
        upload_row.addWidget(name_input, 1)
        upload_row.addWidget(upload_btn)
        layout.addLayout(upload_row)

        list_widget = QListWidget()
        layout.addWidget(list_widget, 1)

        self.tabs[kind.name] = {
            'color_btn': color_btn,
            'name_input': name_input,
            'list': list_widget,
        }
        return page

    # ==================== 资源库列表 ====================

    @Slot(dict)
    def render_libraries(self, config: dict):
        """按最新配置重建资源列表"""
        for kind in (BACKGROUND, PAGER):
            widgets = self.tabs[kind.name]
            library = self.session.library(kind)

            color = config.get(kind.color_key) or kind.default_color
            widgets['color_btn'].setText(color)

            list_widget = widgets['list']
            list_widget.clear()
            if not library.items:
                list_widget.addItem("暂无保存的资源")
                continue

            for index, item in enumerate(library.items):
                self._add_library_row(list_widget, kind, index, item['name'],
                                      library.is_active(item['name']))

    def _add_library_row(self, list_widget, kind, index: int, name: str, applied: bool):
        row = QWidget()
        row_layout = QHBoxLayout(row)
        row_layout.setContentsMargins(6, 4, 6, 4)

        name_label = QLabel(name)
        apply_btn = QPushButton("取消应用" if applied else "应用")
        apply_btn.setObjectName('btnUnapply' if applied else 'btnApply')
        apply_btn.clicked.connect(lambda: self._run(self.session.toggle, kind, name))
        delete_btn = QPushButton("删除")
        delete_btn.setObjectName('btnDelete')
        delete_btn.clicked.connect(lambda: self._confirm_delete(kind, index, name))

        row_layout.addWidget(name_label, 1)
        row_layout.addWidget(apply_btn)
        row_layout.addWidget(delete_btn)

        list_item = QListWidgetItem(list_widget)
        list_item.setSizeHint(row.sizeHint())
        list_widget.setItemWidget(list_item, row)

    def _confirm_delete(self, kind, index: int, name: str):
        reply = QMessageBox.question(self, "删除资源", f"确定删除 \"{name}\"？")
        if reply == QMessageBox.Yes:
            self._run(self.session.remove, kind, index)

    # ==================== 操作 ====================

    def _run(self, func, *args, on_done=None):
        """在工作线程中执行修改，上一次修改完成前忽略新的操作"""
        if self.session.busy or (self.worker and self.worker.isRunning()):
            logger.info("上一次修改尚未完成，忽略本次操作")
            return

        self.worker = WorkerThread(func, *args)
        self.worker.finished.connect(lambda result: self._on_done(result, on_done))
        self.setEnabled(False)
        self.worker.start()

    def _on_done(self, result, on_done=None):
        self.setEnabled(True)
        if isinstance(result, (SkinnerError, ValueError, IndexError, OSError)):
            logger.warning(f"操作失败: {result}")
            QMessageBox.warning(self, "操作失败", str(result))
            return
        if isinstance(result, Exception):
            logger.error(f"操作异常: {result}", exc_info=result)
            QMessageBox.critical(self, "错误", str(result))
            return
        if on_done:
            on_done(result)

    def _choose_color(self, kind):
        """选择颜色：拖动时实时预览，确认后保存"""
        current = self.tabs[kind.name]['color_btn'].text()
        dialog = QColorDialog(QColor(current), self)
        dialog.currentColorChanged.connect(
            lambda color: self.session.preview_color(kind, color.name())
        )
        if dialog.exec():
            self._run(self.session.set_color, kind, dialog.selectedColor().name())
        else:
            self.session.reapply(refetch=False)

    def _upload(self, kind):
        name_input = self.tabs[kind.name]['name_input']
        name = name_input.text().strip()
        if not name:
            QMessageBox.warning(self, "上传失败", "请先填写名称")
            return

        file_path, _ = QFileDialog.getOpenFileName(
            self, "选择图片", "", "图片文件 (*.png *.jpg *.jpeg *.gif *.webp *.bmp *.svg)"
        )
        if not file_path:
            return
        self._run(self.session.add_file, kind, name, file_path,
                  on_done=lambda _: name_input.clear())

    def _import_config(self):
        file_path, _ = QFileDialog.getOpenFileName(self, "导入配置", "", "JSON 文件 (*.json)")
        if file_path:
            self._run(self.session.import_file, file_path,
                      on_done=lambda _: QMessageBox.information(self, "导入", "主题导入成功！"))

    def _export_config(self):
        file_path, _ = QFileDialog.getSaveFileName(self, "导出配置", DEFAULT_EXPORT_NAME, "JSON 文件 (*.json)")
        if file_path:
            self._run(self.session.export_to_file, file_path)
