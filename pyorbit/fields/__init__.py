from pyorbit.fields.base import GraphQLID

__all__ = [
    "GraphQLID",
]
