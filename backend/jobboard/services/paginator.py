import math
from typing import NamedTuple
from jobboard.config import settings
from jobboard.utils.exceptions import InvalidSearchInputError


class Window(NamedTuple):
    offset: int
    limit: int


class Paginator:
    """페이지 번호/크기를 offset 구간으로 변환합니다. 범위를 벗어나면 보정하지 않고 거부합니다."""

    def __init__(self, max_limit: int = settings.SEARCH_MAX_LIMIT):
        self.max_limit = max_limit

    def errors(self, page: int, limit: int) -> list:
        errors = []
        if page < 1:
            errors.append({"field": "page", "message": "page는 1 이상의 정수여야 합니다."})
        if limit < 1 or limit > self.max_limit:
            errors.append({"field": "limit", "message": f"limit은 1에서 {self.max_limit} 사이여야 합니다."})
        return errors

    def window(self, page: int, limit: int) -> Window:
        errors = self.errors(page, limit)
        if errors:
            raise InvalidSearchInputError(errors)
        return Window(offset=(page - 1) * limit, limit=limit)

    @staticmethod
    def total_pages(total_count: int, limit: int) -> int:
        if total_count <= 0:
            return 0
        return math.ceil(total_count / limit)
