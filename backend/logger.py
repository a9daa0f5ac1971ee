import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config import LOG_FILE, LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = LOG_LEVEL, log_file: str = LOG_FILE,
                  max_bytes: int = 10_000_000, backup_count: int = 5) -> logging.Logger:
    """配置根日志：控制台输出，设置了 LOG_FILE 时同时写入滚动文件"""
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # 重复调用 create_app 时不要叠加处理器
    if getattr(logger, "_hair_coach_configured", False):
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if log_file:
        Path(log_file).parent.mkdir(exist_ok=True, parents=True)
        handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger._hair_coach_configured = True
    return logger
