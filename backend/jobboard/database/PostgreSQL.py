# postgresql.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from jobboard.config import settings

SQLALCHEMY_DATABASE_URI = settings.SQLALCHEMY_DATABASE_URI

def _connect_args(uri: str) -> dict:
    """PostgreSQL 연결에 검색 쿼리 타임아웃(statement_timeout)을 적용합니다."""
    if uri.startswith("postgresql"):
        return {"options": f"-c statement_timeout={settings.SEARCH_QUERY_TIMEOUT_MS}"}
    return {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URI,
    echo=False,
    pool_pre_ping=True,
    connect_args=_connect_args(SQLALCHEMY_DATABASE_URI),
)

Base = declarative_base()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
