"""structlog 설정"""

import logging
import os
from typing import Optional

import structlog


def configure_logging(level: Optional[str] = None) -> None:
    """JSON 구조화 로그 설정

    Args:
        level: 로그 레벨 이름 (None이면 BILL_LEDGER_LOG_LEVEL, 기본 INFO)
    """
    level_name = (level or os.getenv("BILL_LEDGER_LOG_LEVEL", "INFO")).upper()
    min_level = logging.getLevelName(level_name)
    if not isinstance(min_level, int):
        raise ValueError(f"알 수 없는 로그 레벨입니다: {level_name}")

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )
