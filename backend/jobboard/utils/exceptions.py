from fastapi import HTTPException, status
from typing import Any, Dict, List, Optional

class AppException(HTTPException):
    """error_code와 부가 정보를 함께 담는 HTTP 예외. main.py의 핸들러가 공통 오류 포맷으로 변환합니다."""
    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        extra_data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.extra_data = extra_data or {}

def create_error_response(
    status_code: int,
    message: str,
    error_code: Optional[str] = None,
    extra_data: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """일관된 에러 응답 포맷 생성"""
    response = {
        "success": False,
        "error": {
            "code": error_code or f"ERR_{status_code}",
            "message": message
        }
    }

    if extra_data:
        response["error"]["details"] = extra_data

    return response

# 자주 사용되는 에러들
class NotFoundException(AppException):
    def __init__(self, resource: str, detail: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail or f"{resource}을(를) 찾을 수 없습니다.",
            error_code="NOT_FOUND"
        )

class BadRequestException(AppException):
    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
            error_code=error_code or "BAD_REQUEST"
        )

class ValidationFailedException(AppException):
    def __init__(self, errors: List[Dict[str, str]], message: str = "입력값 검증에 실패했습니다."):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
            error_code="VALIDATION_FAILED",
            extra_data={"errors": errors}
        )

class UnauthorizedException(AppException):
    def __init__(self, message: str = "자격 증명이 유효하지 않습니다."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )

class ForbiddenException(AppException):
    def __init__(self, message: str = "접근 권한이 없습니다."):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=message,
            error_code="FORBIDDEN"
        )

class ServiceUnavailableException(AppException):
    def __init__(self, message: str = "일시적으로 서비스를 사용할 수 없습니다. 잠시 후 다시 시도해주세요."):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=message,
            error_code="BACKEND_UNAVAILABLE"
        )

# === 검색 엔진 예외 (HTTP 계층과 독립) ===
class SearchEngineError(Exception):
    """검색 엔진에서 발생하는 모든 예외의 기본 클래스"""

class InvalidSearchInputError(SearchEngineError):
    """호출자가 수정할 수 있는 입력 오류 (위반한 모든 필드를 담음)"""
    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))
        self.errors = errors

class BackendUnavailableError(SearchEngineError):
    """저장소 장애 또는 타임아웃. 메시지에 쿼리나 파라미터를 담지 않음"""
    def __init__(self, message: str = "저장소를 사용할 수 없습니다."):
        super().__init__(message)

class JobNotFoundError(SearchEngineError):
    def __init__(self, job_id: int):
        super().__init__(f"ID {job_id}의 채용공고를 찾을 수 없습니다.")
        self.job_id = job_id

class CompanyNotFoundError(SearchEngineError):
    def __init__(self, company_id: int):
        super().__init__(f"ID {company_id}의 회사를 찾을 수 없습니다.")
        self.company_id = company_id

def to_http_exception(error: SearchEngineError) -> AppException:
    """검색 엔진 예외를 HTTP 응답용 예외로 변환합니다."""
    if isinstance(error, InvalidSearchInputError):
        return ValidationFailedException(error.errors)
    if isinstance(error, (JobNotFoundError, CompanyNotFoundError)):
        return NotFoundException("리소스", detail=str(error))
    return ServiceUnavailableException()
