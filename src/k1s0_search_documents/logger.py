"""structlog ベースのロガー設定"""

from __future__ import annotations

import logging
import sys

import structlog

from .config import SearchClientConfig


def configure_logging(level: str = "INFO", format: str = "json") -> None:
    """structlog を設定する。

    Args:
        level: ログレベル ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        format: 出力形式 ("json" or "text")
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if format == "json":
        processors += [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def init_logging(config: SearchClientConfig) -> None:
    """クライアント設定の log_level / log_format でロギングを初期化する。

    ライブラリは自分からは呼ばない。アプリケーションの起動時に 1 回呼ぶ。
    """
    configure_logging(level=config.log_level, format=config.log_format)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """名前付きの structlog ロガーを返す。

    configure_logging より前に取得したロガーも、最初の出力時に設定が反映される。
    """
    return structlog.stdlib.get_logger(name)
