"""Tag taxonomy models.

The taxonomy is the tracker's categorized vocabulary of selectable tags. It is
supplied as data (a JSON snapshot) and only ever read by the engine.
"""

import json
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class Tag(BaseModel):
    """A selectable tag with a stable identifier and a display name."""

    id: str
    name: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:  # noqa: ANN401
        # Snapshots carry numeric ids in some exports and strings in others.
        return str(value)


class TagCategory(BaseModel):
    """A named group of tags (e.g. 'Résolution', 'Codec audio')."""

    name: str
    slug: Optional[str] = None
    tags: List[Tag] = Field(default_factory=list)


class Taxonomy(BaseModel):
    """Read-only lookup structure of categories and tags."""

    categories: List[TagCategory] = Field(default_factory=list)

    @classmethod
    def from_data(cls, data: Any) -> "Taxonomy":  # noqa: ANN401
        """Build a taxonomy from ``{"categories": [...]}`` or a bare category list."""
        if isinstance(data, list):
            return cls(categories=data)
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: Path) -> "Taxonomy":
        """Load a taxonomy snapshot from a JSON file.

        Raises:
            OSError: If the file cannot be read.
            json.JSONDecodeError: If the file is not JSON.
            pydantic.ValidationError: If the document has the wrong shape.
        """
        with open(path, encoding="utf-8") as f:
            return cls.from_data(json.load(f))

    def tag_name(self, tag_id: str) -> Optional[str]:
        """Return the display name of *tag_id*, if present."""
        for category in self.categories:
            for tag in category.tags:
                if tag.id == tag_id:
                    return tag.name
        return None
