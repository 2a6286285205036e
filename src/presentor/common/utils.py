"""公共工具函数：统一日志配置与环境变量配置。

包含：
- `get_logger`：配置并返回指定名称的 `logging.Logger`；
- `get_settings`：从环境变量读取运行参数（图片解析超时、并发数等），非法值直接抛错。
"""

import os
import logging

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """运行参数。"""
    log_level: str = Field(description="日志级别", default="INFO")
    image_timeout: float = Field(description="单张图片查找的超时秒数", default=30.0)
    image_concurrency: int = Field(description="图片查找的最大并发数", default=4)


def _log_level() -> int:
    name = os.getenv("PRESENTOR_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """获取带统一格式的 Logger。

    行为：
    - 日志级别默认 INFO，可通过 `PRESENTOR_LOG_LEVEL` 覆盖；
    - 设置日志格式包含时间、模块名、级别与消息；
    - 返回指定名称的 Logger。
    """
    level = _log_level()
    logging.basicConfig(level=level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    return logging.getLogger(name)


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def get_settings() -> Settings:
    """读取环境变量构造 `Settings`。

    `PRESENTOR_IMAGE_TIMEOUT` 与 `PRESENTOR_IMAGE_CONCURRENCY` 若不是正数则抛出 `ValueError`，
    防止后续运行到一半才失败。
    """
    return Settings(
        log_level=logging.getLevelName(_log_level()),
        image_timeout=_env_number("PRESENTOR_IMAGE_TIMEOUT", 30.0, float),
        image_concurrency=_env_number("PRESENTOR_IMAGE_CONCURRENCY", 4, int),
    )
