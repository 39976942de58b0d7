"""Document models for folio posts."""

import datetime as dt
from pathlib import Path
from typing import Any

import pydantic
from pydantic import BaseModel, Field, field_validator

from folio import markdown
from folio.errors import ValidationError

REQUIRED_FIELDS = ("title", "date", "spoiler")


class FrontMatter(BaseModel):
    """Metadata block at the top of a post."""

    model_config = {"frozen": True}

    title: str = Field(description="Post title")
    date: dt.date = Field(description="Publication date")
    spoiler: str = Field(description="One-line summary shown in post listings")
    extra: dict[Any, Any] = Field(
        default_factory=dict, description="Any other keys found in the block"
    )

    @field_validator("title", "spoiler", mode="before")
    @classmethod
    def coerce_scalar(cls, v: Any) -> Any:
        """Accept bare YAML numbers and dates as text, reject collections."""
        if isinstance(v, bool) or v is None:
            raise ValueError("must be a string")
        if isinstance(v, (int, float)):
            return str(v)
        if isinstance(v, dt.date):
            return v.isoformat()
        if not isinstance(v, str):
            raise ValueError("must be a string")
        return v

    @field_validator("title", "spoiler")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> Any:
        """Reduce datetimes and ISO datetime strings to their date."""
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, dt.date):
            return v
        if isinstance(v, str):
            text = v.strip()
            try:
                return dt.date.fromisoformat(text)
            except ValueError:
                pass
            try:
                return dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
            except ValueError:
                raise ValueError(f"not an ISO date: {v!r}") from None
        raise ValueError(f"not a date: {v!r}")

    @classmethod
    def from_mapping(cls, data: dict[Any, Any]) -> "FrontMatter":
        """Build front matter from a decoded block, collecting unknown keys."""
        known = {key: data[key] for key in REQUIRED_FIELDS if key in data}
        extra = {key: value for key, value in data.items() if key not in REQUIRED_FIELDS}
        return cls(**known, extra=extra)

    def to_mapping(self) -> dict[Any, Any]:
        """Return fields in block order: title, date, spoiler, then extras."""
        data: dict[Any, Any] = {
            "title": self.title,
            "date": self.date.isoformat(),
            "spoiler": self.spoiler,
        }
        data.update(self.extra)
        return data


class Document(BaseModel):
    """One post: front matter plus raw Markdown body."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    slug: str = Field(description="Identifier derived from the storage path")
    front_matter: FrontMatter
    body: str = Field(default="", description="Markdown after the metadata block")
    header: str | None = Field(
        default=None,
        exclude=True,
        repr=False,
        description="Source text of the metadata block, delimiters included",
    )
    source_path: Path | None = Field(default=None, exclude=True)

    @classmethod
    def create(
        cls,
        slug: str,
        title: str,
        date: dt.date | str,
        spoiler: str,
        body: str = "",
        **extra: Any,
    ) -> "Document":
        """Author a new document.

        Raises:
            ValidationError: If the metadata breaks a document invariant.
        """
        try:
            front_matter = FrontMatter(title=title, date=date, spoiler=spoiler, extra=extra)
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"Invalid document {slug!r}: {describe_validation_error(e)}",
                context={"slug": slug},
                original_error=e,
            ) from e
        return cls(slug=slug, front_matter=front_matter, body=body)

    @property
    def title(self) -> str:
        return self.front_matter.title

    @property
    def date(self) -> dt.date:
        return self.front_matter.date

    @property
    def spoiler(self) -> str:
        return self.front_matter.spoiler

    @property
    def word_count(self) -> int:
        return markdown.word_count(self.body)

    @property
    def reading_time(self) -> int:
        """Estimated reading time in minutes."""
        return markdown.reading_time(self.body)

    def with_body(self, body: str) -> "Document":
        """Return a copy with a new body; the metadata block is kept as is."""
        return self.model_copy(update={"body": body})

    def with_front_matter(self, **changes: Any) -> "Document":
        """Return a copy with edited metadata.

        Unknown keys go to ``extra``. The recorded header is dropped so the
        block gets regenerated on serialization.

        Raises:
            ValidationError: If the edit breaks a document invariant.
        """
        data = self.front_matter.to_mapping()
        data.update(changes)
        try:
            front_matter = FrontMatter.from_mapping(data)
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"Invalid metadata for {self.slug!r}: {describe_validation_error(e)}",
                context={"slug": self.slug},
                original_error=e,
            ) from e
        return self.model_copy(update={"front_matter": front_matter, "header": None})


def describe_validation_error(error: pydantic.ValidationError) -> str:
    """Flatten a pydantic error into ``field: reason`` pairs."""
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"]) or "front matter"
        if item["type"] == "missing":
            parts.append(f"missing required field '{field}'")
        else:
            parts.append(f"{field}: {item['msg']}")
    return "; ".join(parts)
