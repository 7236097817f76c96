from datetime import datetime
from pydantic import BaseModel
from .job_post import JobPostBase

class SavedJobBase(BaseModel):
    job_post_id: int

class SavedJobCreate(SavedJobBase):
    pass

class SavedJobResponse(SavedJobBase):
    id: int
    user_id: int
    saved_date: datetime
    job_post: JobPostBase

    class Config:
        from_attributes = True
