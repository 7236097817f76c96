from datetime import timedelta
from typing import Any, Dict, List, Optional
from sqlalchemy import case, func
from sqlalchemy.orm import Session
from jobboard.models.application import Application
from jobboard.models.company import Company
from jobboard.models.job_post import JobPost
from jobboard.schemas.search import ExperienceLevel
from jobboard.services.predicate_builder import ACTIVE_STATUS, Clock, utcnow
import logging

logger = logging.getLogger(__name__)

# 경력 수준은 알파벳순이 아닌 연차순으로 정렬
EXPERIENCE_LEVEL_ORDER = {level.value: rank for rank, level in enumerate(ExperienceLevel, start=1)}

class JobStatsService:
    """검색 화면용 필터 선택지와 통계를 제공하는 서비스 클래스"""

    @staticmethod
    def _distinct_values(db: Session, column) -> List[str]:
        rows = db.query(column).distinct().filter(
            JobPost.status == ACTIVE_STATUS,
            column.isnot(None)
        ).order_by(column).all()
        return [row[0] for row in rows if row[0]]

    @staticmethod
    def _top_value(db: Session, column) -> Optional[str]:
        row = db.query(column, func.count(JobPost.id).label("cnt")).filter(
            JobPost.status == ACTIVE_STATUS,
            column.isnot(None)
        ).group_by(column).order_by(func.count(JobPost.id).desc(), column.asc()).first()
        return row[0] if row else None

    @staticmethod
    def get_filter_options(db: Session) -> Dict[str, Any]:
        """게시 중인 공고 기준 필터 선택지를 조회합니다."""
        companies = db.query(Company.id, Company.company_name).join(
            JobPost, JobPost.company_id == Company.id
        ).filter(
            JobPost.status == ACTIVE_STATUS
        ).distinct().order_by(Company.company_name, Company.id).all()

        level_rank = case(EXPERIENCE_LEVEL_ORDER, value=JobPost.experience_level, else_=len(EXPERIENCE_LEVEL_ORDER) + 1)
        levels = db.query(JobPost.experience_level, level_rank.label("level_rank")).filter(
            JobPost.status == ACTIVE_STATUS
        ).distinct().order_by(level_rank, JobPost.experience_level).all()

        salary = db.query(
            func.min(JobPost.salary_min).label("min_salary"),
            func.max(JobPost.salary_max).label("max_salary"),
            func.avg(JobPost.salary_min).label("avg_min_salary"),
            func.avg(JobPost.salary_max).label("avg_max_salary"),
        ).filter(
            JobPost.status == ACTIVE_STATUS,
            JobPost.salary_min.isnot(None),
            JobPost.salary_max.isnot(None)
        ).one()

        result = {
            "industries": JobStatsService._distinct_values(db, JobPost.industry),
            "locations": JobStatsService._distinct_values(db, JobPost.location),
            "companies": [{"id": c.id, "company_name": c.company_name} for c in companies],
            "job_types": JobStatsService._distinct_values(db, JobPost.job_type),
            "experience_levels": [row[0] for row in levels if row[0]],
            "salary_ranges": {
                key: float(value) if value is not None else None
                for key, value in salary._mapping.items()
            },
        }
        logger.info(f"필터 선택지 조회 완료: 산업군 {len(result['industries'])}건, 회사 {len(result['companies'])}건")
        return result

    @staticmethod
    def get_overview(db: Session, clock: Clock = utcnow) -> Dict[str, Any]:
        """채용공고 통계 개요를 조회합니다."""
        since = clock() - timedelta(days=30)

        active_jobs = db.query(func.count(JobPost.id)).filter(JobPost.status == ACTIVE_STATUS).scalar() or 0
        active_companies = db.query(func.count(func.distinct(JobPost.company_id))).filter(
            JobPost.status == ACTIVE_STATUS
        ).scalar() or 0
        recent_applications = db.query(func.count(Application.id)).filter(
            Application.applied_date >= since
        ).scalar() or 0

        return {
            "active_jobs": active_jobs,
            "active_companies": active_companies,
            "applications_last_30_days": recent_applications,
            "top_industry": JobStatsService._top_value(db, JobPost.industry),
            "top_location": JobStatsService._top_value(db, JobPost.location),
        }
