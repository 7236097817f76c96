from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from jobboard.database.PostgreSQL import Base

class JobSkill(Base):
    __tablename__ = "job_skills"
    __table_args__ = (UniqueConstraint("job_post_id", "skill_id", name="uix_job_skill"),)

    id = Column(Integer, primary_key=True, index=True)
    job_post_id = Column(Integer, ForeignKey("job_posts.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False)
    required_level = Column(String(20), nullable=True)              # 요구 숙련도 ("Beginner" ~ "Expert")
    is_required = Column(Boolean, nullable=False, default=True)     # 필수 여부 (False면 우대 사항)

    job_post = relationship("JobPost", back_populates="required_skills")
    skill = relationship("Skill", back_populates="job_skills")
