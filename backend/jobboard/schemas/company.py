from pydantic import BaseModel
from typing import Optional

class CompanySummary(BaseModel):
    """검색 결과에 포함되는 회사 요약 정보"""
    id: int
    company_name: str
    logo_url: Optional[str] = None
    company_size: Optional[str] = None
    industry: Optional[str] = None

    class Config:
        from_attributes = True

class CompanyResponse(CompanySummary):
    """회사 상세 정보"""
    company_description: Optional[str] = None
    website: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
