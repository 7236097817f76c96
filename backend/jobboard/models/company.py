from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from jobboard.database.PostgreSQL import Base

class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)  # 회사 ID
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)  # 기업 회원 계정
    company_name = Column(String(255), nullable=False, index=True)  # 회사명
    company_description = Column(Text, nullable=True)  # 회사 소개
    industry = Column(String(100), nullable=True)  # 산업군
    company_size = Column(String(20), nullable=True)  # 기업 규모 ("1-10" ~ "1000+")
    website = Column(String(255), nullable=True)
    logo_url = Column(String(500), nullable=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)

    user = relationship("User", back_populates="company")
    job_posts = relationship("JobPost", back_populates="company", cascade="all, delete-orphan")
