"""Shared pydantic base for result and filter models."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class SheetQueryBaseModel(BaseModel):
    """Base for models handed back to callers.

    Field names are snake_case in Python and camelCase on the wire through
    aliases; ``to_dict`` produces the wire form.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True
    )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with aliases, dropping unset optional values."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
