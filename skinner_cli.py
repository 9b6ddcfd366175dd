#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
皮肤配置命令行工具
用于在没有界面的情况下查看和修改背景 / Pager 皮肤配置
"""

import sys
import os

# 添加项目根目录到路径
if getattr(sys, 'frozen', False):
    base_dir = os.path.dirname(sys.executable)
else:
    base_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, base_dir)

from skinner.errors import SkinnerError
from skinner.logger import get_logger, log_exception
from skinner.session import SkinnerSession
from skinner.store import create_store

logger = get_logger('cli')

# 命令行中的资源库名称
KIND_ALIASES = {
    'bg': 'background',
    'background': 'background',
    'pager': 'pager',
}

USAGE = """用法:
  python skinner_cli.py show                       # 查看当前主题和资源库
  python skinner_cli.py list <bg|pager>            # 列出资源
  python skinner_cli.py add <bg|pager> <名称> <图片文件>
  python skinner_cli.py toggle <bg|pager> <名称>   # 应用 / 取消应用
  python skinner_cli.py remove <bg|pager> <序号>
  python skinner_cli.py color <bg|pager> <颜色>    # 如 #303030
  python skinner_cli.py reset <bg|pager>           # 恢复默认颜色
  python skinner_cli.py export [文件]
  python skinner_cli.py import <文件>
  python skinner_cli.py ping                       # 获取 serverid"""


def parse_kind(value: str) -> str:
    if value not in KIND_ALIASES:
        raise ValueError(f"未知的资源库: {value}（可选 bg / pager）")
    return KIND_ALIASES[value]


def print_library(session: SkinnerSession, kind: str):
    library = session.library(kind)
    if not library.items:
        print("暂无保存的资源")
        return
    for i, item in enumerate(library.items):
        mark = '✓' if library.is_active(item['name']) else ' '
        print(f"  [{mark}] {i}: {item['name']}")


@log_exception(logger, exc_info=False)
def run_command(session: SkinnerSession, args: list) -> bool:
    """执行命令

    Returns:
        命令是否被识别
    """
    command, rest = args[0], args[1:]

    if command == 'show':
        session.load_and_apply()
        for line in session.describe():
            print(line)
    elif command == 'list' and len(rest) == 1:
        session.load_and_apply()
        print_library(session, parse_kind(rest[0]))
    elif command == 'add' and len(rest) == 3:
        kind = parse_kind(rest[0])
        session.add_file(kind, rest[1], rest[2])
        print(f"✓ 已添加: {rest[1]}")
    elif command == 'toggle' and len(rest) == 2:
        kind = parse_kind(rest[0])
        session.load_and_apply()
        session.toggle(kind, rest[1])
        library = session.library(kind)
        active = library.active_name
        print(f"✓ 当前应用: {active or '(无)'}")
        if active and library.find(active) is None:
            print(f"⚠ 资源库中没有名为 '{active}' 的资源，将显示颜色")
    elif command == 'remove' and len(rest) == 2:
        kind = parse_kind(rest[0])
        session.load_and_apply()
        session.remove(kind, int(rest[1]))
        print(f"✓ 已删除第 {rest[1]} 项")
    elif command == 'color' and len(rest) == 2:
        session.set_color(parse_kind(rest[0]), rest[1])
        print(f"✓ 颜色已设置: {rest[1]}")
    elif command == 'reset' and len(rest) == 1:
        kind = parse_kind(rest[0])
        session.reset(kind)
        print("✓ 已恢复默认颜色")
    elif command == 'export' and len(rest) <= 1:
        path = session.export_to_file(rest[0] if rest else None)
        print(f"✓ 已导出到: {path}")
    elif command == 'import' and len(rest) == 1:
        session.import_file(rest[0])
        print("✓ 主题导入成功")
    elif command == 'ping':
        backend = session.store.backend
        if not hasattr(backend, 'ping'):
            print("本地模式无需 serverid")
        else:
            serverid = backend.ping()
            print(f"serverid: {serverid or '(获取失败)'}")
    else:
        return False
    return True


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE)
        return 1

    session = SkinnerSession(create_store())
    try:
        if not run_command(session, args):
            print(USAGE)
            return 1
    except (SkinnerError, ValueError, IndexError, OSError) as e:
        print(f"✗ {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
