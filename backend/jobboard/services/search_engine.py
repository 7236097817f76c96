"""
채용공고 검색 엔진

검증 → 조건 생성(PredicateBuilder) → 정렬(Sorter) → 페이지 구간(Paginator)
→ 단일 쿼리 실행(목록 + 전체 건수) → 식별자 주석(IdentityAnnotator) 순서로 처리하고,
응답과 별개로 조회수 증가 작업을 백그라운드에 맡깁니다.
"""

from typing import Any, Callable, Dict, List, Optional
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, contains_eager
from jobboard.config import settings
from jobboard.models.company import Company
from jobboard.models.job_post import JobPost
from jobboard.schemas.company import CompanyResponse
from jobboard.schemas.job_post import (
    JobPostBase,
    JobPostSearchResponse,
    JobPostResponse,
    SimilarJobResponse,
    TrendingJobResponse,
)
from jobboard.schemas.search import (
    CompanyJobsPage,
    FilterSpec,
    Identity,
    Pagination,
    ResultPage,
    SortKey,
)
from jobboard.services.identity_annotator import IdentityAnnotator
from jobboard.services.paginator import Paginator
from jobboard.services.predicate_builder import ACTIVE_STATUS, Clock, PredicateBuilder, utcnow
from jobboard.services.skill_service import SkillService
from jobboard.services.sorter import Sorter
from jobboard.services.view_counter import ViewCounter
from jobboard.utils.exceptions import (
    BackendUnavailableError,
    CompanyNotFoundError,
    InvalidSearchInputError,
    JobNotFoundError,
)
from jobboard.utils.logger import search_logger

# 인기 점수 가중치
VIEW_WEIGHT = 0.7
APPLICATION_WEIGHT = 0.3
SIMILAR_JOBS_LIMIT = 5
MAX_POSTED_WITHIN_DAYS = 365
MAX_RADIUS_KM = 100

Scheduler = Callable[..., Any]


def trending_score(views_count: int, applications_count: int) -> float:
    return round(views_count * VIEW_WEIGHT + applications_count * APPLICATION_WEIGHT, 2)


def _caller(identity: Optional[Identity]) -> str:
    return str(identity.subject_id) if identity else "비로그인"


def _describe(error: SQLAlchemyError) -> str:
    # 쿼리 문자열/파라미터 대신 DB 드라이버 오류만 기록
    return f"{type(error).__name__}: {getattr(error, 'orig', None) or '-'}"


class SearchEngine:
    def __init__(
        self,
        db: Session,
        clock: Clock = utcnow,
        schedule: Optional[Scheduler] = None,
        view_counter: Optional[ViewCounter] = None,
        paginator: Optional[Paginator] = None,
    ):
        self.db = db
        self.clock = clock
        self.schedule = schedule
        self.view_counter = view_counter
        self.predicate_builder = PredicateBuilder(clock)
        self.sorter = Sorter()
        self.paginator = paginator or Paginator()
        self.annotator = IdentityAnnotator(db)

    # === 검증 ===
    def validate(self, spec: FilterSpec) -> None:
        """위반한 모든 필드를 모아 한 번에 거부합니다."""
        errors: List[Dict[str, str]] = list(self.paginator.errors(spec.page, spec.limit))

        if spec.salary_min is not None and spec.salary_min < 0:
            errors.append({"field": "salary_min", "message": "최소 급여는 0 이상이어야 합니다."})
        if spec.salary_max is not None and spec.salary_max < 0:
            errors.append({"field": "salary_max", "message": "최대 급여는 0 이상이어야 합니다."})
        if (
            spec.salary_min is not None
            and spec.salary_max is not None
            and spec.salary_min > spec.salary_max
        ):
            errors.append({"field": "salary_range", "message": "최소 급여가 최대 급여보다 클 수 없습니다."})
        if spec.posted_within_days is not None and not 1 <= spec.posted_within_days <= MAX_POSTED_WITHIN_DAYS:
            errors.append({"field": "posted_within_days", "message": f"posted_within_days는 1에서 {MAX_POSTED_WITHIN_DAYS} 사이여야 합니다."})
        if spec.radius is not None and not 1 <= spec.radius <= MAX_RADIUS_KM:
            errors.append({"field": "radius", "message": f"radius는 1에서 {MAX_RADIUS_KM} 사이여야 합니다."})
        if spec.company_id is not None and spec.company_id < 1:
            errors.append({"field": "company_id", "message": "company_id는 1 이상이어야 합니다."})

        if errors:
            raise InvalidSearchInputError(errors)

    # === 검색 ===
    def search(self, spec: FilterSpec, identity: Optional[Identity] = None) -> ResultPage:
        self.validate(spec)
        predicate = self.predicate_builder.build(spec)
        order = self.sorter.order_key(spec)
        window = self.paginator.window(spec.page, spec.limit)
        params = {**predicate.params, **order.params}

        try:
            # 목록과 전체 건수를 같은 쿼리에서 가져옴 (COUNT(*) OVER())
            rows = (
                self.db.query(JobPost, func.count().over().label("total_count"))
                .join(Company, JobPost.company_id == Company.id)
                .options(contains_eager(JobPost.company))
                .filter(predicate.clause)
                .order_by(*order.clauses())
                .offset(window.offset)
                .limit(window.limit)
                .params(**params)
                .all()
            )
            if rows:
                total = rows[0].total_count
            elif spec.page > 1:
                # 마지막 페이지를 넘어선 요청: 건수만 따로 조회
                total = (
                    self.db.query(func.count(JobPost.id))
                    .join(Company, JobPost.company_id == Company.id)
                    .filter(predicate.clause)
                    .params(**params)
                    .scalar()
                ) or 0
            else:
                total = 0

            items = [JobPostSearchResponse.model_validate(row[0]) for row in rows]
            items = self.annotator.annotate(items, identity)
        except SQLAlchemyError as e:
            search_logger.error(f"채용공고 검색 쿼리 실패: {_describe(e)}")
            raise BackendUnavailableError() from e

        result = ResultPage(
            items=items,
            pagination=Pagination(
                page=spec.page,
                limit=spec.limit,
                total=total,
                total_pages=Paginator.total_pages(total, spec.limit),
            ),
            filters=spec.echo(),
        )
        search_logger.info(
            f"채용공고 검색 완료: {len(items)}건 (전체 {total}건, 페이지 {spec.page}), "
            f"정렬: {order.describe()[0][0]}, 사용자: {_caller(identity)}"
        )
        self._schedule_view_count([item.id for item in items])
        return result

    # === 인기 공고 ===
    def trending(self, limit: int = settings.TRENDING_DEFAULT_LIMIT) -> List[TrendingJobResponse]:
        """최근 게시된 공고를 조회수/지원자 수 가중 점수로 정렬합니다. 부수 효과 없음"""
        errors = [e for e in self.paginator.errors(1, limit) if e["field"] == "limit"]
        if errors:
            raise InvalidSearchInputError(errors)

        predicate = self.predicate_builder.build(FilterSpec(posted_within_days=settings.TRENDING_WINDOW_DAYS))
        score = (
            JobPost.views_count * VIEW_WEIGHT + JobPost.current_applications * APPLICATION_WEIGHT
        ).label("trending_score")

        try:
            rows = (
                self.db.query(JobPost, Company.company_name, Company.logo_url, score)
                .join(Company, JobPost.company_id == Company.id)
                .filter(predicate.clause)
                .order_by(score.desc(), JobPost.posted_date.desc(), JobPost.id.asc())
                .limit(limit)
                .params(**predicate.params)
                .all()
            )
        except SQLAlchemyError as e:
            search_logger.error(f"인기 공고 조회 실패: {_describe(e)}")
            raise BackendUnavailableError() from e

        result = []
        for job, company_name, logo_url, _ in rows:
            result.append(TrendingJobResponse(
                **JobPostBase.model_validate(job).model_dump(),
                views_count=job.views_count or 0,
                current_applications=job.current_applications or 0,
                company_name=company_name,
                logo_url=logo_url,
                trending_score=trending_score(job.views_count or 0, job.current_applications or 0),
            ))
        return result

    # === 상세 조회 ===
    def get_detail(self, job_id: int, identity: Optional[Identity] = None) -> JobPostResponse:
        try:
            job = (
                self.db.query(JobPost)
                .join(Company, JobPost.company_id == Company.id)
                .options(contains_eager(JobPost.company))
                .filter(JobPost.id == job_id, JobPost.status == ACTIVE_STATUS)
                .first()
            )
            if job is None:
                search_logger.warning(f"채용공고를 찾을 수 없음: job_id={job_id}")
                raise JobNotFoundError(job_id)

            detail = JobPostResponse.model_validate(job)
            detail = detail.model_copy(update={
                "skills": SkillService.get_job_skills(self.db, job.id),
                "similar_jobs": self._similar_jobs(job),
            })
            detail = self.annotator.annotate([detail], identity)[0]
        except SQLAlchemyError as e:
            search_logger.error(f"채용공고 상세 조회 실패: job_id={job_id}, {_describe(e)}")
            raise BackendUnavailableError() from e

        search_logger.info(f"채용공고 상세 조회 완료: job_id={job_id}, 사용자: {_caller(identity)}")
        self._schedule_view_count([job_id])
        return detail

    def _similar_jobs(self, job: JobPost) -> List[SimilarJobResponse]:
        # 산업군, 고용형태, 경력 수준 중 하나라도 같은 공고
        conditions = [
            column == value
            for column, value in (
                (JobPost.industry, job.industry),
                (JobPost.job_type, job.job_type),
                (JobPost.experience_level, job.experience_level),
            )
            if value is not None
        ]
        if not conditions:
            return []

        rows = (
            self.db.query(
                JobPost.id, JobPost.title, JobPost.location, JobPost.job_type,
                JobPost.salary_min, JobPost.salary_max, JobPost.posted_date,
                Company.company_name, Company.logo_url,
            )
            .join(Company, JobPost.company_id == Company.id)
            .filter(JobPost.id != job.id, JobPost.status == ACTIVE_STATUS, or_(*conditions))
            .order_by(JobPost.posted_date.desc(), JobPost.id.asc())
            .limit(SIMILAR_JOBS_LIMIT)
            .all()
        )
        return [SimilarJobResponse.model_validate(row) for row in rows]

    # === 회사별 공고 ===
    def company_jobs(
        self,
        company_id: int,
        page: int = 1,
        limit: int = 10,
        identity: Optional[Identity] = None,
    ) -> CompanyJobsPage:
        try:
            company = self.db.query(Company).filter(Company.id == company_id).first()
        except SQLAlchemyError as e:
            search_logger.error(f"회사 조회 실패: company_id={company_id}, {_describe(e)}")
            raise BackendUnavailableError() from e
        if company is None:
            raise CompanyNotFoundError(company_id)

        spec = FilterSpec(company_id=company_id, page=page, limit=limit, sort_by=SortKey.POSTED_DATE)
        result = self.search(spec, identity)
        return CompanyJobsPage(
            company=CompanyResponse.model_validate(company),
            items=result.items,
            pagination=result.pagination,
            filters=result.filters,
        )

    # === 조회수 증가 (fire-and-forget) ===
    def _schedule_view_count(self, job_ids: List[int]) -> None:
        if not job_ids or self.schedule is None or self.view_counter is None:
            return
        try:
            self.schedule(self.view_counter.increment, job_ids)
        except Exception as e:
            search_logger.warning(f"조회수 증가 작업 등록 실패: {e}")
