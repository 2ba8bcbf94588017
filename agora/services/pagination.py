import math
from dataclasses import dataclass, field


@dataclass
class Pagination:
    current_page_num: int
    page_count: int
    page_nums: list[int] = field(default_factory=list)

    @property
    def first_page_num(self) -> int | None:
        return self.page_nums[0] if self.page_nums else None

    @property
    def last_page_num(self) -> int | None:
        return self.page_nums[-1] if self.page_nums else None

    def to_dict(self) -> dict:
        return {
            "first_page_num": self.first_page_num,
            "last_page_num": self.last_page_num,
            "current_page_num": self.current_page_num,
            "page_count": self.page_count,
            "page_nums": self.page_nums,
        }


def page_count(total_count: int, page_size: int) -> int:
    if page_size <= 0 or total_count <= 0:
        return 0
    return math.ceil(total_count / page_size)


def page_window(current_page_num: int, page_count: int, window_size: int) -> list[int]:
    """Contiguous page numbers around the current page, clamped to [1, page_count]."""
    if page_count <= 0 or window_size <= 0:
        return []
    if page_count < window_size:
        return list(range(1, page_count + 1))

    first = current_page_num + 1 - window_size // 2
    first = max(first, 1)
    if first + window_size > page_count:
        first = page_count - window_size + 1
    return list(range(first, first + window_size))


def paginate(current_page_num: int, page_size: int, total_count: int, window_size: int) -> Pagination:
    count = page_count(total_count, page_size)
    return Pagination(
        current_page_num=current_page_num,
        page_count=count,
        page_nums=page_window(current_page_num, count, window_size),
    )


def normalize_page(raw: str | int | None) -> int:
    """Page number from a query parameter; anything unusable becomes 1."""
    if raw is None:
        return 1
    if isinstance(raw, int):
        return raw if raw >= 1 else 1
    raw = raw.strip()
    if not raw.isdigit():
        return 1
    return max(1, int(raw))
