"""
PyInstaller 打包配置文件

使用方法：
1. 准备图标和启动画面（可选）：
   - icon.ico (应用图标)
   - splash.png (启动画面)

2. 安装依赖：
   pip install -e .[build]

3. 执行打包：
   python build_config.py
"""

import PyInstaller.__main__
import os

# 项目根目录
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# 配置参数
APP_NAME = "PagerSkinner"
ICON_PATH = os.path.join(BASE_DIR, "icon.ico")
SPLASH_PATH = os.path.join(BASE_DIR, "splash.png")

# 需要包含的数据文件（打包到 exe 同级）
datas = [
    (os.path.join(BASE_DIR, "settings.json"), "."),
    (os.path.join(BASE_DIR, "media"), "media"),  # 离线模式的 Pager 图形
]

# 需要包含的隐藏导入
hiddenimports = [
    'PySide6.QtCore',
    'PySide6.QtGui',
    'PySide6.QtWidgets',
    'PySide6.QtSvg',
    'sqlite3',
    'requests',
    'PIL',
]

pyinstaller_args = [
    'main.py',
    '--name', APP_NAME,
    '--onefile',
    '--windowed',
    '--clean',
    '--icon', ICON_PATH if os.path.exists(ICON_PATH) else 'NONE',
    '--optimize', '2',
    '--log-level', 'WARN',
    '--distpath', os.path.join(BASE_DIR, 'dist'),
    '--workpath', os.path.join(BASE_DIR, 'build'),
    '--specpath', os.path.join(BASE_DIR, 'build'),
]

if os.path.exists(SPLASH_PATH):
    pyinstaller_args.extend(['--splash', SPLASH_PATH])

# 添加数据文件
for src, dst in datas:
    if os.path.exists(src):
        pyinstaller_args.extend(['--add-data', f'{src}{os.pathsep}{dst}'])

# 添加隐藏导入
for module in hiddenimports:
    pyinstaller_args.extend(['--hidden-import', module])

if __name__ == '__main__':
    print("=" * 60)
    print("开始打包应用程序")
    print("=" * 60)
    print(f"应用名称: {APP_NAME}")
    print(f"图标文件: {ICON_PATH if os.path.exists(ICON_PATH) else '未设置'}")
    print("=" * 60)

    PyInstaller.__main__.run(pyinstaller_args)

    print("\n" + "=" * 60)
    print("打包完成！")
    print(f"可执行文件位置: {os.path.join(BASE_DIR, 'dist')}")
    print("=" * 60)
