from typing import List

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from sheetquery.constants import DocumentType, NUMERIC_FIELD_MARKER
from .base import SheetQueryBaseSettings


class QuerySettings(SheetQueryBaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="QUERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    numeric_field_markers: str = Field(
        default=NUMERIC_FIELD_MARKER,
        description=(
            "Comma-separated substrings that mark a field as numeric when no "
            "explicit field spec is registered (matched case-insensitively)"
        )
    )
    row_document_type: DocumentType = Field(
        default=DocumentType.ROW,
        description="Discriminator of spreadsheet row documents"
    )
    import_document_type: DocumentType = Field(
        default=DocumentType.IMPORT,
        description="Discriminator of import metadata documents"
    )
    match_legacy_double_prefix: bool = Field(
        default=False,
        description=(
            "Also match partitions stored under import_import_<id> by producers "
            "that prefixed the id twice"
        )
    )
    default_files_page_size: int = Field(
        default=1000,
        ge=1,
        le=100000,
        description="Page size used by files-by-filters when the caller sends none or 0"
    )
    default_rows_limit: int = Field(
        default=100,
        ge=1,
        le=100000,
        description="Row limit of field projection queries when the caller sends none"
    )

    @field_validator("numeric_field_markers")
    @classmethod
    def validate_markers(cls, v: str) -> str:
        markers = [m.strip().lower() for m in v.split(",") if m.strip()]
        if not markers:
            raise ValueError("At least one numeric field marker is required")
        return ",".join(markers)

    def get_numeric_markers(self) -> List[str]:
        return self.split_csv(self.numeric_field_markers)
