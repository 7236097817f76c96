from collections import defaultdict
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from jobboard.models.job_skill import JobSkill
from jobboard.models.skill import Skill
from jobboard.schemas.skill import JobSkillResponse, SkillCatalogResponse, SkillResponse
import logging

logger = logging.getLogger(__name__)

# 분류가 없는 기술을 묶는 이름
UNCATEGORIZED = "Other"

class SkillService:
    """공고 요구 기술과 전체 기술 목록을 제공하는 서비스 클래스"""

    @staticmethod
    def get_job_skills(db: Session, job_post_id: int) -> List[JobSkillResponse]:
        """공고의 요구 기술을 필수 기술 먼저, 기술명 순으로 조회합니다."""
        rows = db.query(
            Skill.id.label("skill_id"),
            Skill.name.label("skill_name"),
            Skill.category,
            JobSkill.required_level,
            JobSkill.is_required,
        ).select_from(JobSkill).join(
            Skill, JobSkill.skill_id == Skill.id
        ).filter(
            JobSkill.job_post_id == job_post_id
        ).order_by(
            JobSkill.is_required.desc(), Skill.name.asc(), Skill.id.asc()
        ).all()
        return [JobSkillResponse.model_validate(row) for row in rows]

    @staticmethod
    def get_catalog(db: Session, category: Optional[str] = None) -> SkillCatalogResponse:
        """전체 기술 목록과 분류별 묶음을 조회합니다. category가 주어지면 해당 분류만 반환합니다."""
        query = db.query(Skill)
        if category:
            query = query.filter(Skill.category == category)
        skills = [
            SkillResponse.model_validate(skill)
            for skill in query.order_by(Skill.category, Skill.name).all()
        ]

        grouped: Dict[str, List[SkillResponse]] = defaultdict(list)
        for skill in skills:
            grouped[skill.category or UNCATEGORIZED].append(skill)

        logger.info(f"기술 목록 조회 완료: {len(skills)}건, 분류 {len(grouped)}개")
        return SkillCatalogResponse(skills=skills, skills_by_category=dict(grouped))
