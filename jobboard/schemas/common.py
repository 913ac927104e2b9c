from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from jobboard.config import settings
from jobboard.core.errors import ValidationFailed

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_model(model_cls: type[ModelT], data: ModelT | Mapping[str, Any] | None) -> ModelT:
    """Build a validated model, reporting problems as ValidationFailed."""
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data or {})
    except ValidationError as e:
        details = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationFailed("Validation error", details=details) from e


class PageParams(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default_factory=lambda: settings.default_page_size)

    @field_validator("limit")
    @classmethod
    def limit_in_range(cls, v: int) -> int:
        if v < 1 or v > settings.max_page_size:
            raise ValueError(f"limit must be between 1 and {settings.max_page_size}")
        return v

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total: int
    has_next_page: bool
    has_prev_page: bool


def iso(value) -> str | None:
    return value.isoformat() if value else None
