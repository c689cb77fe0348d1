"""Shared base for document wire models."""

from typing import Any

from pydantic import BaseModel, ConfigDict


ALIGNMENTS = ("left", "center", "right", "justify")


class WireModel(BaseModel):
    """Base model for JSON document nodes.

    Attributes are snake_case; the editors' camelCase names are aliases.
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump in canonical wire form: aliased names, unset optionals omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


def normalize_alignment(value: Any) -> str | None:
    """Return a known alignment value, or None for anything else."""
    if isinstance(value, str) and value in ALIGNMENTS:
        return value
    return None
