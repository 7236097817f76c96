from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from .job_post import JobPostBase

class ApplicationCreate(BaseModel):
    cover_letter: Optional[str] = Field(None, max_length=5000)

class ApplicationResponse(BaseModel):
    id: int
    user_id: int
    job_post_id: int
    status: str
    cover_letter: Optional[str] = None
    applied_date: datetime
    job_post: JobPostBase

    class Config:
        from_attributes = True
