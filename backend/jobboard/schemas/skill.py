from typing import Dict, List, Optional
from pydantic import BaseModel

class SkillResponse(BaseModel):
    id: int
    name: str
    category: Optional[str] = None

    class Config:
        from_attributes = True

class JobSkillResponse(BaseModel):
    """공고별 요구 기술 (필수 기술 먼저, 같은 필수 여부 안에서는 기술명 순)"""
    skill_id: int
    skill_name: str
    category: Optional[str] = None
    required_level: Optional[str] = None
    is_required: bool

    class Config:
        from_attributes = True

class SkillCatalogResponse(BaseModel):
    skills: List[SkillResponse]
    skills_by_category: Dict[str, List[SkillResponse]]
