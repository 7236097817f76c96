from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from jobboard.database import get_db
from jobboard.models.application import Application
from jobboard.models.job_post import JobPost
from jobboard.models.user import User
from jobboard.schemas.application import ApplicationCreate, ApplicationResponse
from jobboard.services.predicate_builder import ACTIVE_STATUS
from jobboard.utils.dependencies import require_jobseeker
from jobboard.utils.exceptions import BadRequestException, NotFoundException
from jobboard.utils.logger import app_logger
from typing import List

router = APIRouter(prefix="/applications", tags=["Applications"])

def _find_application(db: Session, user_id: int, job_post_id: int):
    return db.query(Application).filter_by(user_id=user_id, job_post_id=job_post_id).first()

def _already_applied() -> BadRequestException:
    return BadRequestException("이미 지원한 공고입니다.", error_code="ALREADY_APPLIED")

@router.get(
    "/",
    response_model=List[ApplicationResponse],
    operation_id="get_applications",
    summary="내 지원 내역 조회",
    description="구직자가 지원한 채용공고 목록을 최근 지원한 순으로 조회합니다."
)
def get_applications(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_jobseeker)
):
    return (
        db.query(Application)
        .filter(Application.user_id == current_user.id)
        .order_by(Application.applied_date.desc(), Application.id.desc())
        .all()
    )

@router.post(
    "/{job_id}",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="apply_job",
    summary="채용공고 지원",
    description="""
구직자가 게시 중인 채용공고에 지원합니다.

- 마감일이 지났거나 최대 지원자 수에 도달한 공고, 이미 지원한 공고는 `400 Bad Request` 에러가 발생합니다.
- 지원 성공 시 공고의 지원자 수가 1 증가합니다.
"""
)
def apply_job(
    job_id: int,
    data: ApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_jobseeker)
):
    job = db.query(JobPost).filter(JobPost.id == job_id, JobPost.status == ACTIVE_STATUS).first()
    if not job:
        raise NotFoundException("채용공고")

    today = datetime.now(timezone.utc).date()
    if job.application_deadline is not None and job.application_deadline < today:
        raise BadRequestException("지원 마감일이 지난 공고입니다.", error_code="DEADLINE_PASSED")
    if job.max_applications and (job.current_applications or 0) >= job.max_applications:
        raise BadRequestException("최대 지원자 수에 도달한 공고입니다.", error_code="APPLICATIONS_FULL")

    if _find_application(db, current_user.id, job_id):
        raise _already_applied()

    application = Application(user_id=current_user.id, job_post_id=job_id, cover_letter=data.cover_letter)
    try:
        db.add(application)
        db.query(JobPost).filter(JobPost.id == job_id).update(
            {JobPost.current_applications: JobPost.current_applications + 1},
            synchronize_session=False
        )
        db.commit()
    except IntegrityError:
        # 동시 요청으로 중복 지원이 먼저 저장된 경우
        db.rollback()
        app_logger.warning(f"중복 지원 충돌: user_id={current_user.id}, job_id={job_id}")
        raise _already_applied()
    db.refresh(application)
    app_logger.info(f"채용공고 지원 완료: user_id={current_user.id}, job_id={job_id}")
    return application
