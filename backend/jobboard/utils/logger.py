import logging
import sys
from typing import Optional
from jobboard.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """이름별 콘솔 로거. 레벨을 지정하지 않으면 LOG_LEVEL 설정을 따릅니다."""
    logger = logging.getLogger(name)

    if not logger.handlers:  # 중복 핸들러 방지
        logger.setLevel((level or settings.LOG_LEVEL).upper())

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)

    return logger

# 라우터/요청 처리
app_logger = setup_logger("app")
# 토큰 해석 및 사용자 확인
auth_logger = setup_logger("auth")
# 검색 엔진, 조회수 증가 작업
search_logger = setup_logger("search")
