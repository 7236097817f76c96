from typing import Optional, List
from pydantic import BaseModel

class CompanyOption(BaseModel):
    id: int
    company_name: str

class SalaryRangeSummary(BaseModel):
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    avg_min_salary: Optional[float] = None
    avg_max_salary: Optional[float] = None

class FilterOptionsResponse(BaseModel):
    """검색 필터 선택지"""
    industries: List[str]
    locations: List[str]
    companies: List[CompanyOption]
    job_types: List[str]
    experience_levels: List[str]
    salary_ranges: SalaryRangeSummary

class JobStatsOverview(BaseModel):
    """채용공고 통계 개요"""
    active_jobs: int
    active_companies: int
    applications_last_30_days: int
    top_industry: Optional[str] = None
    top_location: Optional[str] = None
