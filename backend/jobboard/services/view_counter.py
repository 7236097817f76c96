from typing import Callable, Iterable, List
from sqlalchemy.orm import Session
from jobboard.models.job_post import JobPost
from jobboard.utils.logger import search_logger


class ViewCounter:
    """
    조회된 공고의 조회수를 1씩 증가시키는 백그라운드 작업.

    요청 처리와 분리된 자체 세션을 사용하며, 실패는 로그로만 남기고 호출자에게 전파하지 않습니다.
    동시에 실행되는 증가 작업은 DB의 원자적 UPDATE에 맡깁니다.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def increment(self, job_ids: Iterable[int]) -> None:
        ids = sorted(set(job_ids))
        if not ids:
            return
        try:
            self._apply(ids)
        except Exception as e:
            search_logger.error(f"조회수 증가 실패: {len(ids)}건, 오류: {e}")

    def _apply(self, ids: List[int]) -> None:
        db = self.session_factory()
        try:
            db.query(JobPost).filter(JobPost.id.in_(ids)).update(
                {JobPost.views_count: JobPost.views_count + 1},
                synchronize_session=False
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
