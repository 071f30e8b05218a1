"""Axiom 로깅 설정 모듈.

Logging setup module.
Configures the root logger with a console handler and, when Axiom
credentials are configured, an Axiom handler that ships every record
to the configured dataset. Without credentials logging stays local.
"""

import logging
import sys

from axiom_py import Client as AxiomClient
from axiom_py.logging import AxiomHandler

from member_search.config import settings

_FORMAT: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """루트 로거를 구성합니다.

    Configure application logging once at process start.

    Args:
        level: 로그 레벨 이름, None이면 settings.LOG_LEVEL
               (Level name; defaults to settings.LOG_LEVEL)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO))

    # 중복 핸들러 방지 — Avoid stacking handlers on repeated calls
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(console_handler)

    # Axiom 미설정시 콘솔만 사용 — Console only if Axiom not configured
    if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
        client = AxiomClient(token=settings.AXIOM_API_TOKEN)
        root_logger.addHandler(AxiomHandler(client, settings.AXIOM_DATASET))

    # SQL 에코는 DEBUG 설정으로만 — SQL echo is controlled by settings.DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
