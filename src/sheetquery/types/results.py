from typing import Any, Dict, List, Optional

from pydantic import Field

from sheetquery.types.base import SheetQueryBaseModel


class Page(SheetQueryBaseModel):
    """A window over a fully filtered result."""

    items: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    offset: int = 0
    limit: Optional[int] = None
    has_more: bool = Field(default=False, serialization_alias="hasMore")


class FilePage(SheetQueryBaseModel):
    """Page-numbered window over import metadata records."""

    items: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = Field(default=1000, serialization_alias="pageSize")
    total_pages: int = Field(default=0, serialization_alias="totalPages")


class FieldInfo(SheetQueryBaseModel):
    """A column name found in the headers of uploaded files."""

    name: str
    type: str = "string"
    label: str = ""

    @classmethod
    def from_header(cls, name: str) -> "FieldInfo":
        """``fiscal_year`` becomes the label ``Fiscal Year``."""
        label = " ".join(word[:1].upper() + word[1:] for word in name.split("_"))
        return cls(name=name, label=label)
