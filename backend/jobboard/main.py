from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from jobboard.config import settings
from jobboard.database import Base, engine
from jobboard import models  # noqa: F401  (테이블 등록)
from jobboard.routers import (
    jobs,
    saved_job,
    application,
)
from jobboard.utils.exceptions import AppException, create_error_response
from jobboard.utils.logger import app_logger

load_dotenv()

# 앱 시작 시 데이터베이스 초기화 (PostgreSQL 테이블 생성)
@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    app_logger.info("데이터베이스 테이블 준비 완료")
    yield

# FastAPI 앱 생성
app = FastAPI(
    title="Job Board API",
    lifespan=lifespan
)

@app.get("/")
async def root():
    """API 루트 경로"""
    return {
        "message": "Job Board API",
        "version": "1.0.0",
        "docs": "/docs",
    }

# === 예외 처리 ===
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.status_code, exc.detail, exc.error_code, exc.extra_data),
        headers=exc.headers,
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 첫 번째 오류만이 아니라 위반한 모든 필드를 반환
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part not in ("query", "body", "path")),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    app_logger.info(f"요청 검증 실패: {request.url.path}, {len(errors)}건")
    return JSONResponse(
        status_code=400,
        content=create_error_response(400, "입력값 검증에 실패했습니다.", "VALIDATION_FAILED", {"errors": errors}),
    )

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(jobs.router)
app.include_router(saved_job.router)
app.include_router(application.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "jobboard.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=True
    )
