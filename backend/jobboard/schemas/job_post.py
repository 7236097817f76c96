from pydantic import BaseModel, model_serializer
from typing import Optional, List
from datetime import date, datetime
from .company import CompanySummary, CompanyResponse
from .skill import JobSkillResponse

# 식별자 기반 주석 필드 (구직자 로그인 시에만 응답에 포함)
ANNOTATION_FIELDS = ("has_applied", "is_saved")

class JobPostBase(BaseModel):
    """채용공고 기본 필드 스키마"""
    id: int
    title: str
    location: Optional[str] = None
    job_type: str
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    posted_date: datetime

    class Config:
        from_attributes = True

class JobPostSearchResponse(JobPostBase):
    """채용공고 검색 결과 스키마 (목록/검색/회사별 조회 공통)"""
    description: str
    remote_work_option: Optional[str] = None
    salary_currency: Optional[str] = None
    experience_level: str
    industry: Optional[str] = None
    department: Optional[str] = None
    application_deadline: Optional[date] = None
    views_count: int = 0
    current_applications: int = 0
    company: Optional[CompanySummary] = None
    has_applied: Optional[bool] = None
    is_saved: Optional[bool] = None

    @model_serializer(mode="wrap")
    def _omit_absent_annotations(self, handler):
        data = handler(self)
        for field in ANNOTATION_FIELDS:
            if data.get(field) is None:
                data.pop(field, None)
        return data

class TrendingJobResponse(JobPostBase):
    """인기 공고 스키마"""
    views_count: int = 0
    current_applications: int = 0
    company_name: Optional[str] = None
    logo_url: Optional[str] = None
    trending_score: float

class SimilarJobResponse(JobPostBase):
    """상세 조회 시 함께 반환하는 유사 공고"""
    company_name: Optional[str] = None
    logo_url: Optional[str] = None

class JobPostResponse(JobPostSearchResponse):
    """채용공고 상세 조회용 스키마 (모든 필드 포함)"""
    requirements: Optional[str] = None
    status: str
    max_applications: Optional[int] = None
    company: Optional[CompanyResponse] = None
    skills: List[JobSkillResponse] = []
    similar_jobs: List[SimilarJobResponse] = []
