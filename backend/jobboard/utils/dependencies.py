from fastapi import BackgroundTasks, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from jobboard.models.user import User
from jobboard.database import get_db, get_session_factory
from jobboard.schemas.search import Identity, UserRole
from jobboard.services.search_engine import SearchEngine
from jobboard.services.view_counter import ViewCounter
from jobboard.utils.exceptions import ForbiddenException, ServiceUnavailableException, UnauthorizedException
from jobboard.utils.logger import auth_logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from jobboard.config import settings
from typing import Optional

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/token")
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/token", auto_error=False)

def _decode_user_id(token: str) -> Optional[int]:
    """토큰의 sub 클레임에서 사용자 ID를 꺼냅니다. 유효하지 않으면 None"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id_str = payload.get("sub")
        if user_id_str is None:
            return None
        return int(user_id_str)
    except (JWTError, ValueError):
        return None

# DB 오류는 비로그인으로 넘기지 않고 503으로 응답
def _load_user(db: Session, user_id: int) -> Optional[User]:
    try:
        return db.query(User).filter(User.id == user_id).first()
    except SQLAlchemyError as e:
        auth_logger.error(f"사용자 조회 실패: user_id={user_id}, {type(e).__name__}")
        raise ServiceUnavailableException()

# JWT 토큰에서 현재 사용자 가져오기 (필수 인증)
def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    user_id = _decode_user_id(token)
    if user_id is None:
        raise UnauthorizedException()

    user = _load_user(db, user_id)
    if user is None or not user.is_verified:
        auth_logger.warning(f"인증 실패: user_id={user_id}")
        raise UnauthorizedException()
    return user

def require_jobseeker(current_user: User = Depends(get_current_user)) -> User:
    if current_user.user_type != UserRole.JOBSEEKER.value:
        raise ForbiddenException("구직자 계정만 사용할 수 있습니다.")
    return current_user

# 선택 인증: 토큰이 없거나 잘못돼도 비로그인으로 진행 (DB 오류만 503)
def get_optional_identity(token: Optional[str] = Depends(oauth2_scheme_optional), db: Session = Depends(get_db)) -> Optional[Identity]:
    if not token:
        return None
    user_id = _decode_user_id(token)
    if user_id is None:
        return None

    user = _load_user(db, user_id)
    if user is None or not user.is_verified:
        return None
    return Identity(subject_id=user.id, role=user.user_type)

def get_search_engine(
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    session_factory=Depends(get_session_factory),
) -> SearchEngine:
    """요청마다 검색 엔진 생성. 조회수 증가는 응답 이후 백그라운드 작업으로 실행"""
    return SearchEngine(
        db,
        schedule=background_tasks.add_task,
        view_counter=ViewCounter(session_factory),
    )
