# api/services/query.py
"""
Translate list arguments (paging, filter, sort) into SQLAlchemy clauses.

Nothing here touches the database; EarthquakeService composes the pieces
into the count and data statements.
"""
import math
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy import Integer, and_, func, or_
from sqlalchemy.sql.elements import ColumnElement

from schemas.models import EarthquakeFilter, EarthquakeSort
from schemas.tables import Earthquake

MAX_PAGE_SIZE = 100


def normalize_paging(page: int, page_size: int) -> Tuple[int, int, int]:
    """Return (page, page_size, offset) clamped to page >= 1 and 1 <= page_size <= 100."""
    page = max(1, page)
    page_size = min(max(1, page_size), MAX_PAGE_SIZE)
    offset = (page - 1) * page_size
    return page, page_size, offset


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)


def _location_prefix(term: str) -> ColumnElement:
    # "<lat>, <lon>": match the start of either side of the first comma.
    # Without a comma the left side is empty and the right side is the whole string.
    comma = func.instr(Earthquake.location, ",", type_=Integer)
    left = func.trim(func.substr(Earthquake.location, 1, comma - 1))
    right = func.trim(func.substr(Earthquake.location, comma + 1))
    n = len(term)
    return or_(func.substr(left, 1, n) == term, func.substr(right, 1, n) == term)


FILTER_PREDICATES: Dict[str, Callable[[Any], ColumnElement]] = {
    "search": _location_prefix,
    "min_magnitude": lambda v: Earthquake.magnitude >= v,
    "max_magnitude": lambda v: Earthquake.magnitude <= v,
    "from_date": lambda v: Earthquake.date >= v,
    "to_date": lambda v: Earthquake.date <= v,
}


def _is_present(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and value == "":
        return False
    return True


def build_conditions(flt: Optional[EarthquakeFilter]) -> List[ColumnElement]:
    if flt is None:
        return []
    conditions = []
    for name, predicate in FILTER_PREDICATES.items():
        value = getattr(flt, name)
        if _is_present(value):
            conditions.append(predicate(value))
    return conditions


def combine(conditions: List[ColumnElement]) -> Optional[ColumnElement]:
    if not conditions:
        return None
    return and_(*conditions)


SORT_COLUMNS = {
    "DATE": Earthquake.date,
    "MAGNITUDE": Earthquake.magnitude,
    "LOCATION": Earthquake.location,
}

DEFAULT_ORDER = (Earthquake.date.desc(), Earthquake.id.asc())


def build_order_by(sort: Optional[EarthquakeSort]) -> Tuple[ColumnElement, ...]:
    """
    Default order is date DESC. An unrecognized sort field falls back to the
    default without raising. id ASC breaks ties so paging stays stable.
    """
    if sort is None:
        return DEFAULT_ORDER
    column = SORT_COLUMNS.get(sort.field)
    if column is None:
        return DEFAULT_ORDER
    direction = column.asc() if sort.order == "ASC" else column.desc()
    return (direction, Earthquake.id.asc())
