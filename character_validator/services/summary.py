"""Headline fields shown above the full data tree."""

from dataclasses import dataclass, field
from typing import Optional

from character_validator.schema.models import CharacterConfig


@dataclass(frozen=True)
class CharacterSummary:
    """Selected fields of a validated character."""

    name: str
    model_provider: str
    model: Optional[str] = None
    clients: list[str] = field(default_factory=list)
    plugins: list[str] = field(default_factory=list)
    adjectives: list[str] = field(default_factory=list)
    topics: list[str] = field(default_factory=list)
    bio: list[str] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: CharacterConfig) -> "CharacterSummary":
        return cls(
            name=config.name,
            model_provider=config.model_provider,
            model=config.settings_model,
            clients=list(config.clients),
            plugins=list(config.plugins or []),
            adjectives=list(config.adjectives),
            topics=list(config.topics),
            bio=list(config.bio),
        )

    @property
    def has_plugins(self) -> bool:
        return bool(self.plugins)
