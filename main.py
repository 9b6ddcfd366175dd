#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Pager Skinner"""

import sys
import os
import traceback

# 支持 PyInstaller 启动画面
try:
    import pyi_splash
    pyi_splash.update_text('正在初始化...')
except ImportError:
    pyi_splash = None

if getattr(sys, 'frozen', False):
    os.chdir(os.path.dirname(sys.executable))
else:
    os.chdir(os.path.dirname(os.path.abspath(__file__)))

# 初始化日志系统（最优先）
from skinner.logger import get_logger
logger = get_logger('main')

try:
    logger.info("应用启动开始")

    if pyi_splash:
        pyi_splash.update_text('正在加载配置...')

    from skinner.settings import get_settings
    settings = get_settings()
    logger.info(f"配置后端: {settings.get('backend')}")

    if pyi_splash:
        pyi_splash.update_text('正在启动应用...')

    logger.info("开始加载主界面...")
    from ui.app import main

    if __name__ == "__main__":
        if pyi_splash:
            pyi_splash.close()

        logger.info("进入主程序")
        main()

except Exception as e:
    error_msg = f"应用启动失败: {e}\n{traceback.format_exc()}"
    logger.critical(error_msg)

    if pyi_splash:
        try:
            pyi_splash.close()
        except Exception:
            pass

    # 显示错误对话框
    try:
        from PySide6.QtWidgets import QApplication, QMessageBox
        app = QApplication.instance() or QApplication(sys.argv)
        QMessageBox.critical(
            None,
            "启动失败",
            f"应用启动时发生错误:\n\n{e}\n\n详细信息已保存到 logs 目录"
        )
    except Exception:
        print(error_msg)

    sys.exit(1)
