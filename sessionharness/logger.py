"""日志封装：会话配置了 log_level 时把 sessionharness 日志输出到控制台"""
import logging
from typing import Union

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def get_logger(name: str = 'sessionharness', level: Union[int, str] = logging.INFO) -> logging.Logger:
    if isinstance(level, str):
        name_or_level = logging.getLevelName(level.upper())
        if not isinstance(name_or_level, int):
            raise ValueError(f"未知的日志级别: {level}")
        level = name_or_level
    logger = logging.getLogger(name)
    # 重复调用只调整级别，不重复添加处理器
    if not any(getattr(h, '_sessionharness', False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._sessionharness = True
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
