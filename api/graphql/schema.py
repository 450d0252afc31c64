# api/graphql/schema.py
"""
GraphQL schema and FastAPI router.

Example query:
    query {
        earthquakes(page: 1, pageSize: 10, filter: {minMagnitude: 6.0}) {
            data { id location magnitude date }
            total
            totalPages
        }
    }
"""
import strawberry
from fastapi import Request
from strawberry.fastapi import GraphQLRouter

from api.graphql.resolvers import Mutation, Query

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)


async def get_context(request: Request) -> dict:
    # the service is built once per app (see api.main.create_app)
    return {"service": request.app.state.earthquake_service}


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql",
    )
