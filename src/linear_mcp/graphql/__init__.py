"""GraphQL document construction and execution."""

from .fragments import Fragment, FragmentRegistry, default_registry
from .query_builder import Operation, QueryBuilder, VariableDefinition

__all__ = [
    "Fragment",
    "FragmentRegistry",
    "Operation",
    "QueryBuilder",
    "VariableDefinition",
    "default_registry",
]
