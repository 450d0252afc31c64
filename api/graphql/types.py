# api/graphql/types.py
from enum import Enum
from typing import List, Optional

import strawberry

from schemas.models import EarthquakeOut, PagedEarthquakes


@strawberry.enum
class SortField(Enum):
    DATE = "DATE"
    MAGNITUDE = "MAGNITUDE"
    LOCATION = "LOCATION"


@strawberry.enum
class SortOrder(Enum):
    ASC = "ASC"
    DESC = "DESC"


@strawberry.input
class SortInput:
    field: SortField
    order: SortOrder


@strawberry.input
class FilterInput:
    search: Optional[str] = None
    min_magnitude: Optional[float] = None
    max_magnitude: Optional[float] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None


@strawberry.input
class CreateEarthquakeInput:
    location: str
    magnitude: float
    date: Optional[str] = None


@strawberry.input
class UpdateEarthquakeInput:
    # UNSET keeps "omitted" apart from an explicit null
    location: Optional[str] = strawberry.UNSET
    magnitude: Optional[float] = strawberry.UNSET
    date: Optional[str] = strawberry.UNSET


@strawberry.type
class Earthquake:
    id: int
    location: str
    magnitude: float
    date: str

    @classmethod
    def from_model(cls, item: EarthquakeOut) -> "Earthquake":
        return cls(id=item.id, location=item.location, magnitude=item.magnitude, date=item.date)


@strawberry.type
class PaginatedEarthquakes:
    data: List[Earthquake]
    total: int
    page_size: int
    page: int
    total_pages: int

    @classmethod
    def from_model(cls, result: PagedEarthquakes) -> "PaginatedEarthquakes":
        return cls(
            data=[Earthquake.from_model(item) for item in result.data],
            total=result.total,
            page_size=result.page_size,
            page=result.page,
            total_pages=result.total_pages,
        )
