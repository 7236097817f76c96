# Search related schemas
from .search import (
    FilterSpec, Identity, JobSearchRequest, SalaryRange, Pagination, ResultPage, CompanyJobsPage,
    JobType, ExperienceLevel, CompanySize, RemoteWorkOption, SortKey, SortOrder, UserRole,
)

# Job related schemas
from .job_post import JobPostBase, JobPostSearchResponse, JobPostResponse, SimilarJobResponse, TrendingJobResponse
from .company import CompanySummary, CompanyResponse
from .job_stats import FilterOptionsResponse, JobStatsOverview
from .skill import SkillResponse, JobSkillResponse, SkillCatalogResponse

# User related schemas
from .saved_job import SavedJobCreate, SavedJobResponse
from .application import ApplicationCreate, ApplicationResponse

__all__ = [
    # Search related
    "FilterSpec", "Identity", "JobSearchRequest", "SalaryRange", "Pagination", "ResultPage", "CompanyJobsPage",
    "JobType", "ExperienceLevel", "CompanySize", "RemoteWorkOption", "SortKey", "SortOrder", "UserRole",
    # Job related
    "JobPostBase", "JobPostSearchResponse", "JobPostResponse", "SimilarJobResponse", "TrendingJobResponse",
    "CompanySummary", "CompanyResponse",
    "FilterOptionsResponse", "JobStatsOverview",
    "SkillResponse", "JobSkillResponse", "SkillCatalogResponse",
    # User related
    "SavedJobCreate", "SavedJobResponse",
    "ApplicationCreate", "ApplicationResponse",
]
