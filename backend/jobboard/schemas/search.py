from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field
from jobboard.config import settings
from .job_post import JobPostSearchResponse
from .company import CompanyResponse


class JobType(str, Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    INTERNSHIP = "Internship"
    FREELANCE = "Freelance"


class ExperienceLevel(str, Enum):
    ENTRY = "Entry-level"
    MID = "Mid-level"
    SENIOR = "Senior-level"
    EXECUTIVE = "Executive"


class CompanySize(str, Enum):
    XS = "1-10"
    S = "11-50"
    M = "51-200"
    L = "201-500"
    XL = "501-1000"
    XXL = "1000+"


class RemoteWorkOption(str, Enum):
    YES = "Yes"
    NO = "No"
    HYBRID = "Hybrid"


class SortKey(str, Enum):
    RELEVANCE = "relevance"
    POSTED_DATE = "posted_date"
    SALARY = "salary"
    TITLE = "title"
    COMPANY_NAME = "company_name"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class UserRole(str, Enum):
    JOBSEEKER = "jobseeker"
    COMPANY = "company"


class Identity(BaseModel):
    """인증된 호출자 정보 (인증 모듈이 토큰을 해석한 결과)"""
    subject_id: int
    role: str

    class Config:
        frozen = True


class FilterSpec(BaseModel):
    """
    검색 요청 하나의 정규화된 조건.

    모든 필드는 선택이며 서로 독립적입니다 (항상 AND로 결합).
    범위 검증은 SearchEngine이 수행하므로 여기서는 타입만 강제합니다.
    """
    keywords: Optional[str] = None
    location: Optional[str] = None
    job_types: Optional[List[JobType]] = None
    experience_levels: Optional[List[ExperienceLevel]] = None
    industries: Optional[List[str]] = None
    company_sizes: Optional[List[CompanySize]] = None
    remote_work_options: Optional[List[RemoteWorkOption]] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    remote_only: Optional[bool] = None
    posted_within_days: Optional[int] = None
    radius: Optional[int] = None  # 입력만 받고 적용하지 않음 (위치 반경 검색 미지원)
    company_id: Optional[int] = None
    sort_by: SortKey = SortKey.POSTED_DATE
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = settings.SEARCH_DEFAULT_LIMIT

    class Config:
        frozen = True

    def echo(self) -> Dict[str, Any]:
        """클라이언트 상태 동기화를 위해 응답에 그대로 돌려줄 필터 값"""
        return self.model_dump(mode="json", exclude={"page", "limit"})


class SalaryRange(BaseModel):
    min: Optional[float] = Field(None, description="최소 급여 (0 이상)")
    max: Optional[float] = Field(None, description="최대 급여 (0 이상)")


class JobSearchRequest(BaseModel):
    """고급 검색(POST /jobs/search) 요청 본문"""
    keywords: Optional[str] = None
    location: Optional[str] = None
    radius: Optional[int] = Field(None, description="반경(km, 1~100), 현재는 검색에 적용되지 않음")
    job_types: Optional[List[JobType]] = None
    experience_levels: Optional[List[ExperienceLevel]] = None
    industries: Optional[List[str]] = None
    salary_range: Optional[SalaryRange] = None
    remote_only: Optional[bool] = None
    posted_within_days: Optional[int] = Field(None, description="1~365일")
    company_size: Optional[List[CompanySize]] = None
    sort_by: SortKey = SortKey.RELEVANCE
    sort_order: SortOrder = SortOrder.DESC
    page: int = Field(1, description="1부터 시작")
    limit: int = Field(settings.SEARCH_DEFAULT_LIMIT, description=f"1~{settings.SEARCH_MAX_LIMIT}")

    def to_filter_spec(self) -> FilterSpec:
        salary_range = self.salary_range or SalaryRange()
        return FilterSpec(
            keywords=_clean(self.keywords),
            location=_clean(self.location),
            radius=self.radius,
            job_types=self.job_types,
            experience_levels=self.experience_levels,
            industries=[i.strip() for i in self.industries if i and i.strip()] if self.industries else None,
            salary_min=salary_range.min,
            salary_max=salary_range.max,
            remote_only=self.remote_only,
            posted_within_days=self.posted_within_days,
            company_sizes=self.company_size,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            page=self.page,
            limit=self.limit,
        )


def _clean(value: Optional[str]) -> Optional[str]:
    # 공백만 있는 문자열은 조건 없음으로 취급
    if value is None:
        return None
    value = value.strip()
    return value or None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ResultPage(BaseModel):
    """검색 결과 한 페이지"""
    items: List[JobPostSearchResponse]
    pagination: Pagination
    filters: Dict[str, Any]


class CompanyJobsPage(ResultPage):
    """회사별 공고 목록 (회사 정보 포함)"""
    company: CompanyResponse
