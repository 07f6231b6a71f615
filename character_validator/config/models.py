"""Pydantic models for configuration validation."""

from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict


class ValidationRulesConfig(BaseModel):
    """
    Optional allow-lists applied on top of the character schema.

    Leaving a list unset keeps the field unconstrained.
    """

    allowed_model_providers: Optional[list[str]] = Field(
        default=None,
        min_length=1,
        description="Accepted modelProvider values (None = any string)"
    )
    allowed_clients: Optional[list[str]] = Field(
        default=None,
        min_length=1,
        description="Accepted client identifiers (None = any string)"
    )

    @field_validator('allowed_model_providers', 'allowed_clients')
    @classmethod
    def strip_entries(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Drop surrounding whitespace and blank entries."""
        if v is None:
            return None
        cleaned = [item.strip() for item in v if item.strip()]
        if not cleaned:
            raise ValueError('allow-list must contain at least one non-blank value')
        return cleaned


class ViewerConfig(BaseModel):
    """Result page configuration."""

    initial_expanded: bool = Field(
        default=False,
        description="Start the data tree with its root node expanded"
    )
    group_errors_by_path: bool = Field(
        default=True,
        description="Merge errors reported for the same field into one report entry"
    )


class SystemConfig(BaseModel):
    """Top-level system configuration."""

    model_config = ConfigDict(extra='ignore')

    validation: ValidationRulesConfig = Field(default_factory=ValidationRulesConfig)
    viewer: ViewerConfig = Field(default_factory=ViewerConfig)
    sample_path: Optional[Path] = Field(
        default=None,
        description="Character file loaded at startup (defaults to the bundled sample)"
    )
    debug: bool = False
    api_host: str = "localhost"
    api_port: int = Field(default=8080, gt=0, le=65535)
