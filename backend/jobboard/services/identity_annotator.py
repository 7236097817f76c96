from typing import List, Optional, Set
from sqlalchemy.orm import Session
from jobboard.models.application import Application
from jobboard.models.saved_job import SavedJob
from jobboard.schemas.job_post import JobPostSearchResponse
from jobboard.schemas.search import Identity, UserRole

# 지원/찜 여부를 받을 수 있는 역할
ANNOTATED_ROLES = {UserRole.JOBSEEKER.value}


class IdentityAnnotator:
    """
    페이지가 확정된 후 공고별 지원 여부(has_applied)와 찜 여부(is_saved)를 덧붙입니다.

    필터링/정렬/페이지네이션에는 관여하지 않으며, 항목의 순서와 개수를 바꾸지 않습니다.
    """

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def applies_to(identity: Optional[Identity]) -> bool:
        return identity is not None and identity.role in ANNOTATED_ROLES

    def annotate(self, items: List[JobPostSearchResponse], identity: Optional[Identity] = None) -> List[JobPostSearchResponse]:
        if not self.applies_to(identity) or not items:
            return items

        job_ids = [item.id for item in items]
        applied = self._existing(Application, identity.subject_id, job_ids)
        saved = self._existing(SavedJob, identity.subject_id, job_ids)

        return [
            item.model_copy(update={
                "has_applied": item.id in applied,
                "is_saved": item.id in saved,
            })
            for item in items
        ]

    def _existing(self, model, user_id: int, job_ids: List[int]) -> Set[int]:
        rows = self.db.query(model.job_post_id).filter(
            model.user_id == user_id,
            model.job_post_id.in_(job_ids)
        ).all()
        return {row[0] for row in rows}
