from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from jobboard.database.PostgreSQL import Base

class JobPost(Base):
    __tablename__ = "job_posts"

    id = Column(Integer, primary_key=True, index=True)  # 공고 ID
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)  # 회사 ID 참조
    title = Column(String(255), nullable=False)  # 공고 제목
    description = Column(Text, nullable=False)  # 공고 본문
    requirements = Column(Text, nullable=True)  # 자격 요건
    location = Column(String(255), nullable=True)  # 근무지
    remote_work_option = Column(String(10), nullable=True)  # 원격 근무 ("Yes", "No", "Hybrid")

    # 급여 정보는 비어 있을 수 있음 (급여 필터에서 제외되지 않음)
    salary_min = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    salary_max = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    salary_currency = Column(String(10), nullable=True, default="USD")

    job_type = Column(String(20), nullable=False)  # 고용형태
    experience_level = Column(String(20), nullable=False)  # 경력 수준
    industry = Column(String(100), nullable=True)  # 산업군
    department = Column(String(100), nullable=True)  # 부서

    status = Column(String(20), nullable=False, default="active", index=True)  # 공고 상태
    posted_date = Column(DateTime, nullable=False, server_default=func.now(), index=True)  # 공고 게시일
    application_deadline = Column(Date, nullable=True)  # 지원 마감일 (null이면 상시채용)

    max_applications = Column(Integer, nullable=True)  # 최대 지원자 수
    current_applications = Column(Integer, nullable=False, default=0)  # 현재 지원자 수
    views_count = Column(Integer, nullable=False, default=0)  # 조회수

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)  # 생성 시각

    company = relationship("Company", back_populates="job_posts")
    applications = relationship("Application", back_populates="job_post", cascade="all, delete-orphan")
    saved_by = relationship("SavedJob", back_populates="job_post", cascade="all, delete-orphan")
    # 상세 응답의 skills는 SkillService.get_job_skills가 채움
    required_skills = relationship("JobSkill", back_populates="job_post", cascade="all, delete-orphan")
