from datetime import timedelta
from sqlalchemy.orm import Session
from dotenv import load_dotenv

# 환경변수 로드
load_dotenv()
from jobboard.database import Base, SessionLocal, engine
from jobboard.models.company import Company
from jobboard.models.job_post import JobPost
from jobboard.models.job_skill import JobSkill
from jobboard.models.skill import Skill
from jobboard.models.user import User
from jobboard.services.predicate_builder import utcnow
from jobboard.utils.logger import app_logger

initial_users = [
    {"email": "seeker@example.com", "user_type": "jobseeker", "is_verified": True},
    {"email": "hr@acme.example.com", "user_type": "company", "is_verified": True},
]

initial_companies = [
    {"company_name": "Acme Corp", "industry": "Technology", "company_size": "201-500", "city": "Seoul", "country": "KR",
     "website": "https://acme.example.com", "logo_url": "https://cdn.example.com/acme.png"},
    {"company_name": "Blue Bank", "industry": "Finance", "company_size": "1000+", "city": "Busan", "country": "KR"},
    {"company_name": "Tiny Labs", "industry": "Technology", "company_size": "1-10", "city": "Remote", "country": "KR"},
]

# (회사명, 제목, 본문, 근무지, 원격, 고용형태, 경력, 최소급여, 최대급여, 게시 경과일, 조회수, 지원자 수)
initial_job_posts = [
    ("Acme Corp", "Python Backend Engineer", "FastAPI와 PostgreSQL 기반 API 개발", "Seoul", "Hybrid",
     "Full-time", "Mid-level", 60000000, 90000000, 2, 120, 8),
    ("Acme Corp", "Data Engineer", "Python으로 데이터 파이프라인 구축", "Seoul", "No",
     "Full-time", "Senior-level", 80000000, 120000000, 10, 85, 30),
    ("Blue Bank", "Risk Analyst", "금융 리스크 모델링 및 리포팅", "Busan", "No",
     "Full-time", "Entry-level", None, None, 5, 40, 12),
    ("Blue Bank", "Frontend Developer", "사내 업무 시스템 UI 개발", "Busan", "Hybrid",
     "Contract", "Mid-level", 50000000, 70000000, 40, 300, 50),
    ("Tiny Labs", "ML Engineering Intern", "추천 모델 실험 및 평가", "Remote", "Yes",
     "Internship", "Entry-level", 20000000, 25000000, 1, 15, 2),
]

# (기술명, 분류)
initial_skills = [
    ("Python", "Backend"),
    ("FastAPI", "Backend"),
    ("PostgreSQL", "Database"),
    ("SQL", "Database"),
    ("Apache Spark", "Data"),
    ("React", "Frontend"),
    ("TypeScript", "Frontend"),
    ("PyTorch", "Machine Learning"),
    ("Docker", "DevOps"),
    ("Communication", None),
]

# 공고 제목별 요구 기술: (기술명, 요구 숙련도, 필수 여부)
initial_job_skills = {
    "Python Backend Engineer": [
        ("Python", "Advanced", True), ("FastAPI", "Intermediate", True),
        ("PostgreSQL", "Intermediate", True), ("Docker", "Beginner", False),
    ],
    "Data Engineer": [
        ("Python", "Advanced", True), ("Apache Spark", "Advanced", True), ("SQL", "Expert", True),
    ],
    "Risk Analyst": [
        ("SQL", "Intermediate", True), ("Communication", None, False),
    ],
    "Frontend Developer": [
        ("React", "Advanced", True), ("TypeScript", "Intermediate", True),
    ],
    "ML Engineering Intern": [
        ("Python", "Beginner", True), ("PyTorch", "Beginner", False),
    ],
}

def insert_users(db: Session):
    for user in initial_users:
        exists = db.query(User).filter(User.email == user["email"]).first()
        if not exists:
            db.add(User(**user))
    db.commit()
    app_logger.info("초기 사용자 목록 삽입 완료")

def insert_companies(db: Session):
    owner = db.query(User).filter(User.user_type == "company").first()
    for company in initial_companies:
        exists = db.query(Company).filter(Company.company_name == company["company_name"]).first()
        if not exists:
            db.add(Company(user_id=owner.id if owner else None, **company))
    db.commit()
    app_logger.info("초기 회사 목록 삽입 완료")

def insert_job_posts(db: Session):
    now = utcnow()
    companies = {c.company_name: c.id for c in db.query(Company).all()}
    for (company_name, title, description, location, remote, job_type, level,
         salary_min, salary_max, days_ago, views, applications) in initial_job_posts:
        company_id = companies.get(company_name)
        if company_id is None:
            continue
        exists = db.query(JobPost).filter(JobPost.company_id == company_id, JobPost.title == title).first()
        if not exists:
            db.add(JobPost(
                company_id=company_id,
                title=title,
                description=description,
                location=location,
                remote_work_option=remote,
                job_type=job_type,
                experience_level=level,
                industry="Finance" if company_name == "Blue Bank" else "Technology",
                salary_min=salary_min,
                salary_max=salary_max,
                salary_currency="KRW",
                posted_date=now - timedelta(days=days_ago),
                views_count=views,
                current_applications=applications,
            ))
    db.commit()
    app_logger.info("초기 채용공고 목록 삽입 완료")

def insert_skills(db: Session):
    for name, category in initial_skills:
        exists = db.query(Skill).filter(Skill.name == name).first()
        if not exists:
            db.add(Skill(name=name, category=category))
    db.commit()
    app_logger.info("초기 기술 목록 삽입 완료")

def insert_job_skills(db: Session):
    skills = {s.name: s.id for s in db.query(Skill).all()}
    for title, requirements in initial_job_skills.items():
        job = db.query(JobPost).filter(JobPost.title == title).first()
        if job is None:
            continue
        for skill_name, level, is_required in requirements:
            skill_id = skills.get(skill_name)
            if skill_id is None:
                continue
            exists = db.query(JobSkill).filter(
                JobSkill.job_post_id == job.id, JobSkill.skill_id == skill_id
            ).first()
            if not exists:
                db.add(JobSkill(job_post_id=job.id, skill_id=skill_id, required_level=level, is_required=is_required))
    db.commit()
    app_logger.info("초기 공고별 요구 기술 삽입 완료")

def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        insert_users(db)
        insert_companies(db)
        insert_job_posts(db)
        insert_skills(db)
        insert_job_skills(db)
    finally:
        db.close()

if __name__ == "__main__":
    main()
