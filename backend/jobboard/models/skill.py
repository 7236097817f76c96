from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from jobboard.database.PostgreSQL import Base

class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)              # 스킬 ID
    name = Column(String(100), nullable=False, unique=True)         # 기술명
    category = Column(String(50), nullable=True, index=True)        # 분류 (예: "Backend", "Data")

    job_skills = relationship("JobSkill", back_populates="skill", cascade="all, delete-orphan")
