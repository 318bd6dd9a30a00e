import strawberry
from strawberry.fastapi import GraphQLRouter

from veranstalter.resolvers.context import get_context
from veranstalter.resolvers.mutation import Mutation
from veranstalter.resolvers.query import Query

schema = strawberry.Schema(query=Query, mutation=Mutation)

graphql_router = GraphQLRouter(schema, context_getter=get_context)
