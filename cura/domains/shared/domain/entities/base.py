"""Base model for records parsed from backend payloads."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, model_validator


class BackendRecord(BaseModel):
    """
    Base class for every backend record.

    Unknown fields are ignored and explicit nulls fall back to the field
    default, so a missing optional value and a null one parse the same way.
    Required fields that are missing or null raise ValidationError.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        validate_default=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @classmethod
    def parse(cls, data: Any) -> Self:
        return cls.model_validate(data)

    @classmethod
    def parse_list(cls, rows: Iterable[Any] | None) -> list[Self]:
        return [cls.model_validate(row) for row in rows or []]
