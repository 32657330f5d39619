"""Query builder factory.

Builds compilers and clause builders configured from environment
settings, so callers never thread numeric markers or import attributes
through by hand.
"""

from typing import Optional

from sheetquery.constants import PARTITION_KEY_ATTRIBUTE
from sheetquery.query_builder.clauses import FilterClauseBuilder
from sheetquery.query_builder.compiler import QueryCompiler
from sheetquery.query_builder.conditions import ConditionClauseBuilder
from sheetquery.query_builder.encoder import ValueEncoder
from sheetquery.types import FieldSpecRegistry


class QueryBuilderFactory:
    """Factory for settings-aware query builders.

    Example:
        >>> builder = QueryBuilderFactory.create_clause_builder()
        >>> compiler = QueryBuilderFactory.create_compiler()
    """

    @staticmethod
    def create_registry() -> FieldSpecRegistry:
        """Create an empty registry that infers types with the configured markers."""
        from sheetquery.settings import get_settings

        return FieldSpecRegistry(markers=get_settings().query.get_numeric_markers())

    @staticmethod
    def create_clause_builder(registry: Optional[FieldSpecRegistry] = None) -> FilterClauseBuilder:
        if registry is None:
            registry = QueryBuilderFactory.create_registry()
        return FilterClauseBuilder(ValueEncoder(), registry)

    @staticmethod
    def create_condition_builder() -> ConditionClauseBuilder:
        return ConditionClauseBuilder(ValueEncoder())

    @staticmethod
    def create_compiler(import_attribute: str = PARTITION_KEY_ATTRIBUTE) -> QueryCompiler:
        return QueryCompiler(import_attribute=import_attribute, encoder=ValueEncoder())


def get_clause_builder(registry: Optional[FieldSpecRegistry] = None) -> FilterClauseBuilder:
    """Get a clause builder using the configured numeric field markers."""
    return QueryBuilderFactory.create_clause_builder(registry)


def get_condition_builder() -> ConditionClauseBuilder:
    return QueryBuilderFactory.create_condition_builder()


def get_query_compiler(import_attribute: str = PARTITION_KEY_ATTRIBUTE) -> QueryCompiler:
    """Get a compiler matching import candidates on ``import_attribute``."""
    return QueryBuilderFactory.create_compiler(import_attribute)
