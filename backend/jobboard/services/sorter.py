"""정렬 키(sort_by)를 결과 전체에 대한 전순서(total order)로 변환합니다."""

from dataclasses import dataclass, field
from typing import Any, Dict, List
from sqlalchemy import bindparam, case
from sqlalchemy.sql.elements import ColumnElement
from jobboard.models.company import Company
from jobboard.models.job_post import JobPost
from jobboard.schemas.search import FilterSpec, SortKey, SortOrder
from jobboard.services.predicate_builder import LIKE_ESCAPE, like_pattern


@dataclass(frozen=True)
class OrderTerm:
    name: str
    expression: Any
    descending: bool = False
    nulls_last: bool = False

    def to_clause(self) -> ColumnElement:
        clause = self.expression.desc() if self.descending else self.expression.asc()
        if self.nulls_last:
            clause = clause.nullslast()
        return clause


@dataclass
class OrderKey:
    terms: List[OrderTerm] = field(default_factory=list)
    params: Dict[str, Any] = field(default_factory=dict)

    def clauses(self) -> List[ColumnElement]:
        return [term.to_clause() for term in self.terms]

    def describe(self) -> List[tuple]:
        """(필드, 방향) 목록. 로깅/테스트용"""
        return [(term.name, "desc" if term.descending else "asc") for term in self.terms]


def relevance_tier(pattern) -> ColumnElement:
    # 1: 제목 일치, 2: 회사명 일치, 3: 본문 일치, 4: 일치 없음
    return case(
        (JobPost.title.ilike(pattern, escape=LIKE_ESCAPE), 1),
        (Company.company_name.ilike(pattern, escape=LIKE_ESCAPE), 2),
        (JobPost.description.ilike(pattern, escape=LIKE_ESCAPE), 3),
        else_=4,
    )


class Sorter:
    def order_key(self, spec: FilterSpec) -> OrderKey:
        key = OrderKey()
        descending = spec.sort_order == SortOrder.DESC

        if spec.sort_by == SortKey.SALARY:
            # 급여순은 요청한 sort_order와 관계없이 항상 높은 순
            key.terms.append(OrderTerm("salary_max", JobPost.salary_max, descending=True, nulls_last=True))
            key.terms.append(OrderTerm("salary_min", JobPost.salary_min, descending=True, nulls_last=True))
        elif spec.sort_by == SortKey.TITLE:
            key.terms.append(OrderTerm("title", JobPost.title, descending=descending))
        elif spec.sort_by == SortKey.COMPANY_NAME:
            key.terms.append(OrderTerm("company_name", Company.company_name, descending=descending))
        elif spec.sort_by == SortKey.POSTED_DATE:
            key.terms.append(OrderTerm("posted_date", JobPost.posted_date, descending=descending))
        elif spec.keywords:
            pattern = bindparam("relevance_pattern")
            key.terms.append(OrderTerm("relevance", relevance_tier(pattern)))
            key.params["relevance_pattern"] = like_pattern(spec.keywords)

        # 2차 정렬: 최신 게시일, 3차 정렬: 공고 ID (페이지 간 결과 고정)
        if not any(term.name == "posted_date" for term in key.terms):
            key.terms.append(OrderTerm("posted_date", JobPost.posted_date, descending=True))
        key.terms.append(OrderTerm("id", JobPost.id))
        return key
