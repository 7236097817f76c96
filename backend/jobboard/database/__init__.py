from jobboard.database.PostgreSQL import Base, engine, SessionLocal

# DB 세션을 제공하는 의존성 함수
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# 백그라운드 작업(조회수 증가 등)이 자체 세션을 열 때 사용하는 세션 팩토리
def get_session_factory():
    return SessionLocal
