"""日志系统模块

统一的日志配置，将日志输出到文件和控制台
"""

import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler


def get_log_dir() -> str:
    """确定日志目录

    优先使用环境变量 SKINNER_LOG_DIR，否则为 exe 所在目录下的 logs/
    """
    override = os.environ.get('SKINNER_LOG_DIR')
    if override:
        return override

    if getattr(sys, 'frozen', False):
        base_dir = os.path.dirname(sys.executable)
    else:
        base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base_dir, 'logs')


def setup_logger(name='skinner', level=logging.DEBUG):
    """配置日志系统

    Args:
        name: 日志记录器名称
        level: 日志级别

    Returns:
        配置好的 logger 对象
    """
    log_folder = get_log_dir()
    os.makedirs(log_folder, exist_ok=True)

    # 日志文件名（按日期）
    log_filename = datetime.now().strftime('skinner_%Y%m%d.log')
    log_filepath = os.path.join(log_folder, log_filename)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 避免重复添加 handler
    if logger.handlers:
        return logger

    # 文件处理器（带轮转，单个文件最大 10MB，保留 5 个备份）
    file_handler = RotatingFileHandler(
        log_filepath,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    logger.debug(f"日志文件: {log_filepath}")

    return logger


def log_exception(logger, exc_info=True):
    """记录异常信息的装饰器

    Args:
        logger: logger 对象
        exc_info: 是否记录异常堆栈
    """
    def decorator(func):
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"函数 {func.__name__} 执行失败: {e}",
                    exc_info=exc_info
                )
                raise
        return wrapper
    return decorator


# 全局 logger 实例缓存
_loggers = {}

# 新建 logger 使用的级别（settings.json 的 log_level）
_log_level = logging.DEBUG


def get_logger(name='skinner'):
    """获取 logger 实例

    Args:
        name: logger 名称

    Returns:
        logger 对象
    """
    if name not in _loggers:
        _loggers[name] = setup_logger(name, _log_level)
    return _loggers[name]


def set_log_level(level):
    """设置所有 logger 的日志级别（包括之后创建的）

    Args:
        level: 级别名称（如 'INFO'）或 logging 常量

    Returns:
        实际生效的级别
    """
    global _log_level
    resolved = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(resolved, int):
        raise ValueError(f"未知的日志级别: {level!r}")

    _log_level = resolved
    for logger in _loggers.values():
        logger.setLevel(resolved)
    return resolved
