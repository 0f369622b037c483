"""日志配置模块

基于loguru配置stderr和文件日志输出
"""

import sys
from typing import Optional

from loguru import logger

from .config import Settings, get_settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"
DEFAULT_HANDLER_ID = 0

# 当前生效的sink，重复配置时先移除
_handler_ids: list[int] = []


def setup_logging(settings: Optional[Settings] = None) -> list[int]:
    """配置日志输出

    移除loguru默认sink，按配置添加stderr输出和可选的按天轮转文件输出。
    可以重复调用，每次都会替换上一次添加的sink。

    Args:
        settings: 配置对象，为空时使用get_settings()

    Returns:
        list[int]: 添加的sink ID
    """
    settings = settings or get_settings()
    level = settings.log_level.upper()

    if not _handler_ids:
        # 只移除loguru默认的stderr sink（id 0），宿主应用添加的sink保持不变
        try:
            logger.remove(DEFAULT_HANDLER_ID)
        except ValueError:
            logger.debug("默认sink已被移除")
    for handler_id in _handler_ids:
        logger.remove(handler_id)
    _handler_ids.clear()

    _handler_ids.append(logger.add(sys.stderr, level=level, format=LOG_FORMAT))

    if settings.log_file:
        _handler_ids.append(logger.add(
            settings.log_file,
            rotation="1 day",
            retention="30 days",
            level=level,
            format=LOG_FORMAT,
            serialize=settings.log_serialize
        ))

    logger.info(f"日志已配置，级别: {level}")
    return list(_handler_ids)
