"""Type definitions for SheetQuery."""

from sheetquery.types.base import SheetQueryBaseModel
from sheetquery.types.filters import (
    FieldSpec,
    FieldSpecRegistry,
    FilterEntry,
    ImportIdCandidateSet,
    CompiledPredicate,
    FilterCondition,
)
from sheetquery.types.results import Page, FilePage, FieldInfo

__all__ = [
    "SheetQueryBaseModel",
    "FieldSpec",
    "FieldSpecRegistry",
    "FilterEntry",
    "ImportIdCandidateSet",
    "CompiledPredicate",
    "FilterCondition",
    "Page",
    "FilePage",
    "FieldInfo",
]
