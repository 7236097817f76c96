# User related models
from .user import User
from .application import Application
from .saved_job import SavedJob

# Job related models
from .company import Company
from .job_post import JobPost
from .skill import Skill
from .job_skill import JobSkill

__all__ = [
    # User related
    "User", "Application", "SavedJob",
    # Job related
    "Company", "JobPost", "Skill", "JobSkill",
]
