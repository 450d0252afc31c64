# api/services/earthquakes.py
"""
Earthquake service: list/get/create/update/delete against the store.

Every public method is one store interaction in its own session. Input is
validated before the store is touched. Anything other than an application
error (ValidationError, NotFound) is logged and re-raised as InternalError
with a generic message.
"""
import functools
import logging
import re
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from api.errors import EarthquakeError, InternalError, NotFound, ValidationError
from api.metrics import OPERATION_COUNT
from api.services.query import (
    build_conditions,
    build_order_by,
    combine,
    normalize_paging,
    total_pages,
)
from schemas.models import (
    EarthquakeCreate,
    EarthquakeFilter,
    EarthquakeOut,
    EarthquakeSort,
    EarthquakeUpdate,
    PagedEarthquakes,
)
from schemas.tables import Earthquake

logger = logging.getLogger(__name__)

MIN_MAGNITUDE = 0.0
MAX_MAGNITUDE = 10.0


def validate_magnitude(magnitude: float) -> None:
    # written so NaN fails too
    if not (MIN_MAGNITUDE <= magnitude <= MAX_MAGNITUDE):
        raise ValidationError("Magnitude must be between 0 and 10")


# calendar dates only (no week or ordinal forms), optional time and UTC offset
ISO_DATE_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{3}|\.\d{6})?)?(?:Z|[+-]\d{2}:\d{2})?)?"
)


def validate_date(value: str) -> None:
    if not isinstance(value, str) or not ISO_DATE_RE.fullmatch(value.strip()):
        raise ValidationError("Invalid date format")
    try:
        datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError("Invalid date format")


def validate_location(location: str) -> None:
    if not location or not location.strip():
        raise ValidationError("Location is required")


def utc_now_iso() -> str:
    # same shape as the stored dates: 2024-01-01T12:00:00.000Z
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def operation(action: str):
    """Wrap a service method so unexpected failures surface as 'Failed to <action>'."""
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                result = fn(*args, **kwargs)
            except EarthquakeError as exc:
                OPERATION_COUNT.labels(operation=fn.__name__, outcome=exc.code).inc()
                raise
            except Exception as exc:
                logger.exception("Error in earthquake %s", fn.__name__)
                OPERATION_COUNT.labels(operation=fn.__name__, outcome=InternalError.code).inc()
                raise InternalError(f"Failed to {action}") from exc
            OPERATION_COUNT.labels(operation=fn.__name__, outcome="ok").inc()
            return result
        return wrapper
    return decorator


class EarthquakeService:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @operation("fetch earthquakes")
    def list(
        self,
        page: int = 1,
        page_size: int = 10,
        sort: Optional[EarthquakeSort] = None,
        filter: Optional[EarthquakeFilter] = None,
    ) -> PagedEarthquakes:
        page, page_size, offset = normalize_paging(page, page_size)
        where = combine(build_conditions(filter))

        count_q = select(func.count()).select_from(Earthquake)
        data_q = select(Earthquake)
        if where is not None:
            count_q = count_q.where(where)
            data_q = data_q.where(where)
        data_q = data_q.order_by(*build_order_by(sort)).limit(page_size).offset(offset)

        with self._session_factory() as s:
            total = s.execute(count_q).scalar_one()
            rows = s.execute(data_q).scalars().all()
            data = [EarthquakeOut.model_validate(r) for r in rows]

        return PagedEarthquakes(
            data=data,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages(total, page_size),
        )

    @operation("fetch earthquake")
    def get(self, earthquake_id: int) -> EarthquakeOut:
        with self._session_factory() as s:
            row = s.get(Earthquake, earthquake_id)
            if row is None:
                raise NotFound(earthquake_id)
            return EarthquakeOut.model_validate(row)

    @operation("create earthquake")
    def create(self, payload: EarthquakeCreate) -> EarthquakeOut:
        validate_location(payload.location)
        validate_magnitude(payload.magnitude)
        if payload.date:
            validate_date(payload.date)

        with self._session_factory() as s:
            row = Earthquake(
                location=payload.location,
                magnitude=payload.magnitude,
                date=payload.date or utc_now_iso(),
            )
            s.add(row)
            s.commit()
            s.refresh(row)
            logger.debug("Created earthquake %s", row.id)
            return EarthquakeOut.model_validate(row)

    @operation("update earthquake")
    def update(self, earthquake_id: int, payload: EarthquakeUpdate) -> EarthquakeOut:
        changes = payload.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None:
                raise ValidationError(f"{field.capitalize()} cannot be null")
        if "location" in changes:
            validate_location(changes["location"])
        if "magnitude" in changes:
            validate_magnitude(changes["magnitude"])
        if "date" in changes:
            validate_date(changes["date"])

        with self._session_factory() as s:
            row = s.get(Earthquake, earthquake_id)
            if row is None:
                raise NotFound(earthquake_id)
            for field, value in changes.items():
                setattr(row, field, value)
            s.commit()
            s.refresh(row)
            return EarthquakeOut.model_validate(row)

    @operation("delete earthquake")
    def delete(self, earthquake_id: int) -> bool:
        with self._session_factory() as s:
            row = s.get(Earthquake, earthquake_id)
            if row is None:
                raise NotFound(earthquake_id)
            s.delete(row)
            s.commit()
            return True
