"""Base model for Passport API responses.

Every response model inherits from :class:`PassportBaseModel`, which
ignores unknown keys and stashes the original payload in ``raw``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PassportBaseModel(BaseModel):
    """Base for Passport API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        # Keep an explicit raw= from keyword construction.
        if "raw" in values:
            return values
        return {**values, "raw": dict(values)}
