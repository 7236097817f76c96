"""
검색 조건(FilterSpec)을 파라미터 바인딩된 SQLAlchemy 조건식으로 변환합니다.

사용자 입력은 절대 SQL 문자열에 직접 이어 붙이지 않고,
이름 있는 bindparam과 별도의 파라미터 딕셔너리로만 전달합니다.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence
from sqlalchemy import and_, or_, bindparam, true
from sqlalchemy.sql.elements import ColumnElement
from jobboard.models.company import Company
from jobboard.models.job_post import JobPost
from jobboard.schemas.search import FilterSpec, RemoteWorkOption

ACTIVE_STATUS = "active"
REMOTE_FRIENDLY_OPTIONS = [RemoteWorkOption.YES.value, RemoteWorkOption.HYBRID.value]
LIKE_ESCAPE = "\\"

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    # DB에는 timezone 없는 UTC 시각으로 저장
    return datetime.now(timezone.utc).replace(tzinfo=None)


def like_pattern(text: str) -> str:
    """부분 일치 검색용 패턴. 사용자가 입력한 %, _ 는 문자 그대로 취급합니다."""
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _values(items: Optional[Sequence[Any]]) -> List[Any]:
    if not items:
        return []
    return [getattr(item, "value", item) for item in items]


@dataclass
class BuiltPredicate:
    """조건식 목록과 그에 대응하는 바인딩 파라미터"""
    clauses: List[ColumnElement] = field(default_factory=list)
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def clause(self) -> ColumnElement:
        if not self.clauses:
            return true()
        return and_(*self.clauses)


class PredicateBuilder:
    def __init__(self, clock: Clock = utcnow):
        self.clock = clock

    def build(self, spec: FilterSpec) -> BuiltPredicate:
        now = self.clock()
        built = BuiltPredicate()

        def add(clause: ColumnElement, **params: Any) -> None:
            built.clauses.append(clause)
            built.params.update(params)

        if spec.keywords:
            keywords = bindparam("keywords")
            add(
                or_(
                    JobPost.title.ilike(keywords, escape=LIKE_ESCAPE),
                    JobPost.description.ilike(keywords, escape=LIKE_ESCAPE),
                    Company.company_name.ilike(keywords, escape=LIKE_ESCAPE),
                ),
                keywords=like_pattern(spec.keywords),
            )

        if spec.location:
            add(
                JobPost.location.ilike(bindparam("location"), escape=LIKE_ESCAPE),
                location=like_pattern(spec.location),
            )

        # 다중 선택 필터: 빈 목록은 "조건 없음"
        multi_valued = [
            ("job_types", JobPost.job_type, spec.job_types),
            ("experience_levels", JobPost.experience_level, spec.experience_levels),
            ("industries", JobPost.industry, spec.industries),
            ("company_sizes", Company.company_size, spec.company_sizes),
            ("remote_work_options", JobPost.remote_work_option, spec.remote_work_options),
        ]
        for name, column, selected in multi_valued:
            values = _values(selected)
            if values:
                add(column.in_(bindparam(name, expanding=True)), **{name: values})

        # 급여 범위: 급여 정보가 없는 공고는 제외하지 않음
        if spec.salary_min is not None:
            add(
                or_(JobPost.salary_min >= bindparam("salary_min"), JobPost.salary_min.is_(None)),
                salary_min=spec.salary_min,
            )
        if spec.salary_max is not None:
            add(
                or_(JobPost.salary_max <= bindparam("salary_max"), JobPost.salary_max.is_(None)),
                salary_max=spec.salary_max,
            )

        if spec.remote_only:
            add(
                JobPost.remote_work_option.in_(bindparam("remote_friendly", expanding=True)),
                remote_friendly=list(REMOTE_FRIENDLY_OPTIONS),
            )

        if spec.posted_within_days is not None:
            if spec.posted_within_days < 1:
                raise ValueError(f"posted_within_days must be positive, got {spec.posted_within_days}")
            add(
                JobPost.posted_date >= bindparam("posted_since"),
                posted_since=now - timedelta(days=spec.posted_within_days),
            )

        if spec.company_id is not None:
            if spec.company_id < 1:
                raise ValueError(f"company_id must be positive, got {spec.company_id}")
            add(JobPost.company_id == bindparam("company_id"), company_id=spec.company_id)

        # 기본 조건 (항상 마지막): 게시 중이며 마감일이 지나지 않은 공고
        add(
            and_(
                JobPost.status == bindparam("active_status"),
                or_(
                    JobPost.application_deadline.is_(None),
                    JobPost.application_deadline >= bindparam("today"),
                ),
            ),
            active_status=ACTIVE_STATUS,
            today=now.date(),
        )
        return built
