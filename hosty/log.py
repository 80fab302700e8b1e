"""
日志配置
"""

import logging
import sys

LOGGER_NAME = "hosty"


def setup_logger(log_level: str = "INFO") -> logging.Logger:
    """
    配置日志系统

    参数:
        log_level: 日志级别名称

    返回:
        配置好的日志记录器实例
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # 避免重复的处理器
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    # 格式: 时间戳 - 名称 - 级别 - 消息
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    return logger
