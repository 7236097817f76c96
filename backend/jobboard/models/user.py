from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from jobboard.database.PostgreSQL import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False)          # 이메일
    hashed_password = Column(String, nullable=True)                   # 비밀번호 해시
    user_type = Column(String(20), nullable=False)                    # 회원 유형 ("jobseeker" or "company")
    is_verified = Column(Boolean, nullable=False, default=False)      # 이메일 인증 여부
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)  # 가입일

    # Relationships (one-to-many)
    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan")
    saved_jobs = relationship("SavedJob", back_populates="user", cascade="all, delete-orphan")
    company = relationship("Company", back_populates="user", uselist=False)
