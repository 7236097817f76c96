from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt
from jobboard.config import settings

# 액세스 토큰 생성 (토큰 발급 자체는 외부 인증 서비스 담당, 개발/테스트용)
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt
