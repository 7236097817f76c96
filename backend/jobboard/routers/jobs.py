from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional
from jobboard.config import settings
from jobboard.database import get_db
from jobboard.schemas.job_post import JobPostResponse, TrendingJobResponse
from jobboard.schemas.job_stats import FilterOptionsResponse, JobStatsOverview
from jobboard.schemas.skill import SkillCatalogResponse
from jobboard.schemas.search import (
    CompanyJobsPage,
    ExperienceLevel,
    FilterSpec,
    Identity,
    JobSearchRequest,
    JobType,
    RemoteWorkOption,
    ResultPage,
    SortKey,
    SortOrder,
)
from jobboard.services.job_stats_service import JobStatsService
from jobboard.services.search_engine import SearchEngine
from jobboard.services.skill_service import SkillService
from jobboard.utils.dependencies import get_optional_identity, get_search_engine
from jobboard.utils.exceptions import SearchEngineError, ServiceUnavailableException, to_http_exception
from jobboard.utils.logger import app_logger

router = APIRouter(prefix="/jobs", tags=["jobs"])

def _single(value) -> Optional[list]:
    return [value] if value is not None else None

def _text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None

@router.get(
    "/",
    response_model=ResultPage,
    operation_id="list_jobs",
    summary="전체 채용공고 조회 (필터/정렬/페이징 지원)",
    description="""
    키워드, 근무지, 고용형태, 경력 수준, 원격 근무, 급여, 산업군 조건으로 게시 중인 채용공고를 조회합니다.\n
    - `page`(기본 1), `limit`(기본 20, 최대 50)으로 페이지네이션합니다. 범위를 벗어나면 400 오류를 반환합니다.\n
    - 급여 정보가 없는 공고는 급여 필터에서 제외되지 않습니다.\n
    - `sort_by=salary`는 `sort_order`와 관계없이 항상 높은 급여순입니다.\n
    - **구직자로 로그인 시, 각 공고에 지원 여부(`has_applied`)와 찜 여부(`is_saved`)를 함께 반환합니다.**
    """
)
def list_jobs(
    page: int = Query(1, description="페이지 번호 (1부터 시작)"),
    limit: int = Query(settings.SEARCH_DEFAULT_LIMIT, description=f"페이지당 공고 수 (1~{settings.SEARCH_MAX_LIMIT})"),
    search: Optional[str] = Query(None, description="제목/본문/회사명 키워드"),
    location: Optional[str] = Query(None, description="근무지 (부분 일치)"),
    job_type: Optional[JobType] = Query(None, description="고용형태"),
    experience_level: Optional[ExperienceLevel] = Query(None, description="경력 수준"),
    remote_work_option: Optional[RemoteWorkOption] = Query(None, description="원격 근무 여부"),
    salary_min: Optional[float] = Query(None, description="최소 급여 (0 이상)"),
    salary_max: Optional[float] = Query(None, description="최대 급여 (0 이상, 최소 급여 이상)"),
    industry: Optional[str] = Query(None, description="산업군"),
    sort_by: SortKey = Query(SortKey.POSTED_DATE, description="정렬 기준"),
    sort_order: SortOrder = Query(SortOrder.DESC, description="정렬 방향"),
    identity: Optional[Identity] = Depends(get_optional_identity),
    engine: SearchEngine = Depends(get_search_engine),
):
    spec = FilterSpec(
        keywords=_text(search),
        location=_text(location),
        job_types=_single(job_type),
        experience_levels=_single(experience_level),
        remote_work_options=_single(remote_work_option),
        salary_min=salary_min,
        salary_max=salary_max,
        industries=_single(_text(industry)),
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    try:
        return engine.search(spec, identity)
    except SearchEngineError as e:
        app_logger.warning(f"채용공고 조회 실패: {type(e).__name__}")
        raise to_http_exception(e)

@router.post(
    "/search",
    response_model=ResultPage,
    operation_id="search_jobs",
    summary="채용공고 고급 검색",
    description="""
여러 조건을 조합하여 채용공고를 검색합니다. 모든 조건은 AND로 결합됩니다.

- `job_types`, `experience_levels`, `industries`, `company_size`는 목록 중 하나와 일치하면 포함됩니다. 빈 목록은 조건 없음입니다.
- `sort_by=relevance`(기본값)는 키워드가 제목 → 회사명 → 본문 순으로 일치하는 공고를 먼저 보여줍니다.
- `radius`는 입력만 받으며 현재 검색에는 적용되지 않습니다.
"""
)
def search_jobs(
    request: JobSearchRequest,
    identity: Optional[Identity] = Depends(get_optional_identity),
    engine: SearchEngine = Depends(get_search_engine),
):
    try:
        return engine.search(request.to_filter_spec(), identity)
    except SearchEngineError as e:
        app_logger.warning(f"채용공고 고급 검색 실패: {type(e).__name__}")
        raise to_http_exception(e)

@router.get(
    "/trending/popular",
    response_model=List[TrendingJobResponse],
    operation_id="trending_jobs",
    summary="인기 채용공고 조회",
    description="최근 30일 내 게시된 공고를 `조회수 × 0.7 + 지원자 수 × 0.3` 점수 순으로 반환합니다."
)
def trending_jobs(
    limit: int = Query(settings.TRENDING_DEFAULT_LIMIT, ge=1, le=settings.SEARCH_MAX_LIMIT, description="반환할 공고 수"),
    engine: SearchEngine = Depends(get_search_engine),
):
    try:
        return engine.trending(limit)
    except SearchEngineError as e:
        app_logger.warning(f"인기 채용공고 조회 실패: {type(e).__name__}")
        raise to_http_exception(e)

@router.get(
    "/company/{company_id}",
    response_model=CompanyJobsPage,
    operation_id="company_jobs",
    summary="회사별 채용공고 조회",
    description="특정 회사의 게시 중인 공고를 최신순으로 반환합니다. 회사가 없으면 404 오류를 반환합니다."
)
def company_jobs(
    company_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=settings.SEARCH_MAX_LIMIT),
    identity: Optional[Identity] = Depends(get_optional_identity),
    engine: SearchEngine = Depends(get_search_engine),
):
    try:
        return engine.company_jobs(company_id, page=page, limit=limit, identity=identity)
    except SearchEngineError as e:
        app_logger.warning(f"회사별 채용공고 조회 실패: company_id={company_id}, {type(e).__name__}")
        raise to_http_exception(e)

# === 필터 선택지 / 통계 (정적 경로) ===
@router.get(
    "/filters/options",
    response_model=FilterOptionsResponse,
    summary="검색 필터 선택지 조회",
    description="게시 중인 공고의 산업군, 근무지, 회사, 고용형태, 경력 수준 목록과 급여 범위를 반환합니다."
)
def get_filter_options(db: Session = Depends(get_db)):
    try:
        return JobStatsService.get_filter_options(db)
    except SQLAlchemyError as e:
        app_logger.error(f"필터 선택지 조회 실패: {type(e).__name__}")
        raise ServiceUnavailableException()

@router.get(
    "/stats/overview",
    response_model=JobStatsOverview,
    summary="채용공고 통계 개요",
    description="게시 중인 공고 수, 채용 중인 회사 수, 최근 30일 지원 수, 최다 산업군/근무지를 반환합니다."
)
def get_stats_overview(db: Session = Depends(get_db)):
    try:
        return JobStatsService.get_overview(db)
    except SQLAlchemyError as e:
        app_logger.error(f"채용공고 통계 조회 실패: {type(e).__name__}")
        raise ServiceUnavailableException()

@router.get(
    "/skills/all",
    response_model=SkillCatalogResponse,
    summary="전체 기술 목록 조회",
    description="""
등록된 모든 기술을 분류, 기술명 순으로 반환합니다.

- `category`를 지정하면 해당 분류의 기술만 반환합니다.
- `skills_by_category`는 분류별로 묶은 목록이며, 분류가 없는 기술은 `Other`에 들어갑니다.
"""
)
def get_all_skills(
    category: Optional[str] = Query(None, description="기술 분류"),
    db: Session = Depends(get_db),
):
    try:
        return SkillService.get_catalog(db, _text(category))
    except SQLAlchemyError as e:
        app_logger.error(f"기술 목록 조회 실패: {type(e).__name__}")
        raise ServiceUnavailableException()

@router.get(
    "/{job_id}",
    response_model=JobPostResponse,
    operation_id="get_job_detail",
    summary="채용공고 상세 조회",
    description="""
특정 채용공고의 상세 정보와 유사 공고(최대 5건)를 조회합니다.

- `job_id`에 해당하는 게시 중인 공고가 없으면 404 오류를 반환합니다.
- 구직자로 로그인한 경우 지원 여부와 찜 여부도 함께 반환합니다.
"""
)
def get_job_detail(
    job_id: int,
    identity: Optional[Identity] = Depends(get_optional_identity),
    engine: SearchEngine = Depends(get_search_engine),
):
    try:
        return engine.get_detail(job_id, identity)
    except SearchEngineError as e:
        app_logger.warning(f"채용공고 상세 조회 실패: job_id={job_id}, {type(e).__name__}")
        raise to_http_exception(e)
