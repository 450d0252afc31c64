# schemas/models.py
from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class EarthquakeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location: str
    magnitude: float
    date: str


class EarthquakeCreate(BaseModel):
    location: str
    magnitude: float
    date: Optional[str] = None


class EarthquakeUpdate(BaseModel):
    """
    Partial update. Only fields that were actually supplied end up in
    model_dump(exclude_unset=True); an explicit None stays distinguishable
    from an omitted field.
    """
    location: Optional[str] = None
    magnitude: Optional[float] = None
    date: Optional[str] = None


class EarthquakeFilter(BaseModel):
    search: Optional[str] = None
    min_magnitude: Optional[float] = None
    max_magnitude: Optional[float] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None


class EarthquakeSort(BaseModel):
    # plain strings: an unrecognized field falls back to the default order
    field: str
    order: str = "DESC"


class PagedEarthquakes(BaseModel):
    data: List[EarthquakeOut]
    total: int
    page: int
    page_size: int
    total_pages: int
