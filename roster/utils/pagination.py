"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides sort/page request value objects, the Page result model with its
derived metadata, and the paginate function that fetches a window plus
the total count.

Pages are 0-indexed: page 0 is the first page.
"""

import math
from enum import Enum
from typing import Any, Callable, Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, computed_field
from sqlalchemy import Select, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from roster.utils.exceptions import InvalidArgumentError

T = TypeVar("T")
U = TypeVar("U")


class Direction(str, Enum):
    """정렬 방향 — Sort direction."""

    ASC = "asc"
    DESC = "desc"


class Order(BaseModel):
    """단일 정렬 조건 — One sort property and its direction."""

    property: str
    direction: Direction = Direction.ASC


class Sort(BaseModel):
    """정렬 조건 목록 — Ordered list of sort orders.

    Usage:
        Sort.by("username", direction=Direction.DESC)
        Sort.parse("username,desc")
    """

    orders: list[Order] = []

    @classmethod
    def by(cls, *properties: str, direction: Direction = Direction.ASC) -> "Sort":
        return cls(orders=[Order(property=p, direction=direction) for p in properties])

    @classmethod
    def unsorted(cls) -> "Sort":
        return cls(orders=[])

    @classmethod
    def parse(cls, *expressions: str) -> "Sort":
        """`property[,asc|desc]` 표현식을 파싱합니다.

        Parse query-string style expressions such as "username,desc".

        Raises:
            InvalidArgumentError: 방향 값이 잘못된 경우 (Unknown direction)
        """
        orders: list[Order] = []
        for expression in expressions:
            prop, _, raw_direction = expression.partition(",")
            prop = prop.strip()
            if not prop:
                raise InvalidArgumentError(f"Empty sort property in {expression!r}")
            try:
                direction = Direction((raw_direction.strip() or "asc").lower())
            except ValueError:
                raise InvalidArgumentError(f"Unknown sort direction in {expression!r}") from None
            orders.append(Order(property=prop, direction=direction))
        return cls(orders=orders)

    def and_(self, other: "Sort") -> "Sort":
        return Sort(orders=[*self.orders, *other.orders])

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)


def check_window(page: int, size: int) -> None:
    """페이지 인자를 검증합니다 — Reject a negative page or a non-positive size."""
    if page < 0:
        raise InvalidArgumentError(f"Page index must not be negative, got {page}")
    if size <= 0:
        raise InvalidArgumentError(f"Page size must be positive, got {size}")


class PageRequest(BaseModel):
    """페이지 요청 — 0부터 시작하는 페이지 번호, 크기, 정렬.

    Page request: 0-based page index, page size and optional sort.
    Build it through PageRequest.of so invalid input is rejected early.
    """

    page: int
    size: int
    sort: Sort = Sort()

    @classmethod
    def of(cls, page: int, size: int, sort: Sort | None = None) -> "PageRequest":
        """검증된 페이지 요청을 생성합니다.

        Raises:
            InvalidArgumentError: page < 0 또는 size <= 0
        """
        check_window(page, size)
        return cls(page=page, size=size, sort=sort or Sort())

    @property
    def offset(self) -> int:
        return self.page * self.size

    def next(self) -> "PageRequest":
        return PageRequest.of(self.page + 1, self.size, self.sort)

    def first(self) -> "PageRequest":
        return PageRequest.of(0, self.size, self.sort)


def count_pages(total: int, size: int) -> int:
    """전체 페이지 수 — ceil(total / size), 0건이면 0."""
    if total <= 0:
        return 0
    return math.ceil(total / size)


def window_length(total: int, page: int, size: int) -> int:
    """해당 페이지에 담길 항목 수 — min(size, total - offset), 0 미만은 0."""
    return max(0, min(size, total - page * size))


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Pagination result: the content window plus the metadata derived from the
    total count and the request.

    Attributes:
        content: 현재 페이지 항목 목록 (Items for the current page)
        number: 현재 페이지 번호, 0부터 시작 (Current page, 0-indexed)
        size: 페이지당 항목 수 (Requested page size)
        total_elements: 전체 항목 수 (Total count across all pages)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    content: list[T]
    number: int
    size: int
    total_elements: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return count_pages(self.total_elements, self.size)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_first(self) -> bool:
        return self.number == 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_last(self) -> bool:
        return not self.has_next

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @classmethod
    def build(cls, content: Sequence[T], page_request: PageRequest, total: int) -> "Page[T]":
        """내용과 전체 개수로 페이지를 구성합니다 — Assemble a page from a window and a count."""
        return cls(
            content=list(content),
            number=page_request.page,
            size=page_request.size,
            total_elements=total,
        )

    def map(self, fn: Callable[[T], U], item_type: Any = Any) -> "Page[U]":
        """각 항목을 변환한 새 페이지를 반환합니다 (메타데이터 유지).

        Return a page with every item converted; the metadata is unchanged.
        item_type parametrises the resulting page, e.g. Page[MemberResponse].
        """
        return Page[item_type](
            content=[fn(item) for item in self.content],
            number=self.number,
            size=self.size,
            total_elements=self.total_elements,
        )


def resolve_total(content_length: int, page_request: PageRequest) -> int | None:
    """count 쿼리 없이 전체 개수를 알 수 있으면 반환합니다.

    The total is known without a count statement when the window is
    partially filled: on the first page, or on any page with at least one
    but fewer than size rows. Returns None when a count is needed.
    """
    if page_request.offset == 0 and content_length < page_request.size:
        return content_length
    if 0 < content_length < page_request.size:
        return page_request.offset + content_length
    return None


def apply_sort(query: Select, model: type, sort: Sort | None) -> Select:
    """정렬 조건을 쿼리에 적용합니다.

    Raises:
        InvalidArgumentError: 모델에 없는 속성으로 정렬할 때 (Unknown sort property)
    """
    if sort is None:
        return query
    columns = inspect(model).column_attrs
    for order in sort.orders:
        if order.property not in columns:
            raise InvalidArgumentError(f"Unknown sort property: {order.property}")
        column = getattr(model, order.property)
        query = query.order_by(column.desc() if order.direction is Direction.DESC else column.asc())
    return query


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page_request: PageRequest,
    count_query: Select[Any] | None = None,
    scalars: bool = True,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated query, returning the window and the total count.
    The window is fetched first with OFFSET/LIMIT; the count statement runs
    only when the window alone cannot determine the total.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: 정렬까지 적용된 SELECT 쿼리 (Base query, already sorted)
        page_request: 페이지 요청 (Validated page request)
        count_query: 별도 count 쿼리, None이면 서브쿼리로 계산
                     (Explicit count query; defaults to COUNT over a subquery)
        scalars: True이면 첫 컬럼만 반환 (Return scalars instead of rows)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수)
    """
    check_window(page_request.page, page_request.size)

    result = await db.execute(query.offset(page_request.offset).limit(page_request.size))
    items: Sequence[Any] = result.scalars().all() if scalars else result.all()

    total: int | None = resolve_total(len(items), page_request)
    if total is None:
        # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
        if count_query is None:
            count_query = select(func.count()).select_from(query.order_by(None).subquery())
        total = (await db.execute(count_query)).scalar() or 0

    return items, total
