from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from jobboard.database import get_db
from jobboard.models.job_post import JobPost
from jobboard.models.saved_job import SavedJob
from jobboard.models.user import User
from jobboard.schemas.saved_job import SavedJobCreate, SavedJobResponse
from jobboard.utils.dependencies import require_jobseeker
from jobboard.utils.exceptions import BadRequestException, NotFoundException
from jobboard.utils.logger import app_logger
from typing import List

# 찜 목록은 검색 결과의 is_saved 표시에 사용됨
router = APIRouter(prefix="/saved-jobs", tags=["Saved Jobs"])

def _find_saved(db: Session, user_id: int, job_post_id: int):
    return db.query(SavedJob).filter(
        SavedJob.user_id == user_id,
        SavedJob.job_post_id == job_post_id
    ).first()

def _already_saved() -> BadRequestException:
    return BadRequestException("이미 찜한 공고입니다.", error_code="ALREADY_SAVED")

@router.get(
    "/",
    response_model=List[SavedJobResponse],
    operation_id="get_saved_jobs",
    summary="찜한 채용공고 목록 조회",
    description="구직자가 찜한 채용공고를 최근 찜한 순으로 반환합니다. 각 항목에 공고 기본 정보가 포함됩니다."
)
def get_saved_jobs(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_jobseeker)
):
    return (
        db.query(SavedJob)
        .filter(SavedJob.user_id == current_user.id)
        .order_by(SavedJob.saved_date.desc(), SavedJob.id.desc())
        .all()
    )

@router.post(
    "/",
    response_model=SavedJobResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="save_job",
    summary="채용공고 찜하기",
    description="""
구직자가 채용공고를 찜합니다.

- 존재하지 않는 공고는 `404 Not Found`(`NOT_FOUND`)를 반환합니다.
- 이미 찜한 공고는 `400 Bad Request`(`ALREADY_SAVED`)를 반환합니다.
"""
)
def save_job(
    data: SavedJobCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_jobseeker)
):
    if db.query(JobPost.id).filter(JobPost.id == data.job_post_id).first() is None:
        raise NotFoundException("채용공고")
    if _find_saved(db, current_user.id, data.job_post_id):
        raise _already_saved()

    saved = SavedJob(user_id=current_user.id, job_post_id=data.job_post_id)
    try:
        db.add(saved)
        db.commit()
    except IntegrityError:
        # 동시 요청으로 같은 찜이 먼저 저장된 경우
        db.rollback()
        app_logger.warning(f"중복 찜 충돌: user_id={current_user.id}, job_post_id={data.job_post_id}")
        raise _already_saved()
    db.refresh(saved)
    app_logger.info(f"공고 찜 완료: user_id={current_user.id}, job_post_id={data.job_post_id}")
    return saved

@router.delete(
    "/{job_post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="unsave_job",
    summary="찜 해제",
    description="찜한 공고를 목록에서 삭제합니다. 찜하지 않은 공고면 `404 Not Found`를 반환합니다."
)
def unsave_job(
    job_post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_jobseeker)
):
    saved = _find_saved(db, current_user.id, job_post_id)
    if saved is None:
        raise NotFoundException("찜한 공고")
    db.delete(saved)
    db.commit()
    app_logger.info(f"공고 찜 해제: user_id={current_user.id}, job_post_id={job_post_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
