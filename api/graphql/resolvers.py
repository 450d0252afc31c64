# api/graphql/resolvers.py
from typing import Optional

import strawberry
from graphql import GraphQLError
from starlette.concurrency import run_in_threadpool
from strawberry.types import Info

from api.errors import EarthquakeError
from api.graphql.types import (
    CreateEarthquakeInput,
    Earthquake,
    FilterInput,
    PaginatedEarthquakes,
    SortInput,
    UpdateEarthquakeInput,
)
from api.services.earthquakes import EarthquakeService
from schemas.models import EarthquakeCreate, EarthquakeFilter, EarthquakeSort, EarthquakeUpdate

UPDATABLE_FIELDS = ("location", "magnitude", "date")


def _service(info: Info) -> EarthquakeService:
    return info.context["service"]


def _to_graphql_error(exc: EarthquakeError) -> GraphQLError:
    return GraphQLError(exc.message, extensions={"code": exc.code})


def _to_filter(flt: Optional[FilterInput]) -> Optional[EarthquakeFilter]:
    if flt is None:
        return None
    return EarthquakeFilter(
        search=flt.search,
        min_magnitude=flt.min_magnitude,
        max_magnitude=flt.max_magnitude,
        from_date=flt.from_date,
        to_date=flt.to_date,
    )


def _to_sort(sort: Optional[SortInput]) -> Optional[EarthquakeSort]:
    if sort is None:
        return None
    return EarthquakeSort(field=sort.field.value, order=sort.order.value)


def _to_update(data: UpdateEarthquakeInput) -> EarthquakeUpdate:
    supplied = {}
    for name in UPDATABLE_FIELDS:
        value = getattr(data, name)
        if value is not strawberry.UNSET:
            supplied[name] = value
    return EarthquakeUpdate(**supplied)


async def _run(fn, *args, **kwargs):
    """Run a blocking service call in the threadpool, mapping application errors."""
    try:
        return await run_in_threadpool(fn, *args, **kwargs)
    except EarthquakeError as exc:
        raise _to_graphql_error(exc) from exc


@strawberry.type
class Query:
    @strawberry.field
    async def earthquakes(
        self,
        info: Info,
        page: Optional[int] = 1,
        page_size: Optional[int] = 10,
        sort: Optional[SortInput] = None,
        filter: Optional[FilterInput] = None,
    ) -> PaginatedEarthquakes:
        result = await _run(
            _service(info).list,
            page=1 if page is None else page,
            page_size=10 if page_size is None else page_size,
            sort=_to_sort(sort),
            filter=_to_filter(filter),
        )
        return PaginatedEarthquakes.from_model(result)

    @strawberry.field
    async def earthquake(self, info: Info, id: int) -> Optional[Earthquake]:
        return Earthquake.from_model(await _run(_service(info).get, id))


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_earthquake(self, info: Info, input: CreateEarthquakeInput) -> Earthquake:
        payload = EarthquakeCreate(location=input.location, magnitude=input.magnitude, date=input.date)
        return Earthquake.from_model(await _run(_service(info).create, payload))

    @strawberry.mutation
    async def update_earthquake(self, info: Info, id: int, input: UpdateEarthquakeInput) -> Earthquake:
        return Earthquake.from_model(await _run(_service(info).update, id, _to_update(input)))

    @strawberry.mutation
    async def delete_earthquake(self, info: Info, id: int) -> bool:
        return await _run(_service(info).delete, id)
