"""
Character File Models
=====================

Pydantic models for the character configuration format.

Field names follow the JSON keys (camelCase aliases) so that error
locations read the same as the document the user uploaded, e.g.
``messageExamples.0.0.content.text``.
"""

from typing import Annotated, Any, Optional
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from character_validator.config.models import ValidationRulesConfig


def _rules_from(info: ValidationInfo) -> Optional[ValidationRulesConfig]:
    """Allow-lists passed through the validation context, if any."""
    context = info.context or {}
    return context.get("rules")


def _enum_error(allowed: list[str], received: str) -> PydanticCustomError:
    return PydanticCustomError(
        "invalid_enum_value",
        "Invalid enum value. Expected {expected}, received '{received}'",
        {"expected": " | ".join(f"'{value}'" for value in allowed), "received": received},
    )


def _not_null(expected: str) -> BeforeValidator:
    """Optional fields may be omitted but never set to null."""

    def check(value: Any) -> Any:
        if value is None:
            raise PydanticCustomError(
                "invalid_type",
                "Expected {expected}, received null",
                {"expected": expected},
            )
        return value

    return BeforeValidator(check)


def _check_client(value: str, info: ValidationInfo) -> str:
    rules = _rules_from(info)
    if rules is not None and rules.allowed_clients and value not in rules.allowed_clients:
        raise _enum_error(rules.allowed_clients, value)
    return value


ClientName = Annotated[str, AfterValidator(_check_client)]


class MessageContent(BaseModel):
    """Body of a single example message."""

    model_config = ConfigDict(extra='ignore', frozen=True)

    text: str
    action: Annotated[Optional[str], _not_null("string")] = None


class MessageTurn(BaseModel):
    """One turn of an example conversation."""

    model_config = ConfigDict(extra='ignore', frozen=True)

    user: str
    content: MessageContent


# An example conversation needs at least one turn
Conversation = Annotated[list[MessageTurn], Field(min_length=1)]


class VoiceSettings(BaseModel):
    """Voice configuration."""

    model_config = ConfigDict(extra='ignore', frozen=True)

    model: str


class CharacterSettings(BaseModel):
    """
    Open-ended settings block.

    Keys other than ``secrets`` and ``voice`` are kept as-is and exposed
    through ``model_extra``.
    """

    model_config = ConfigDict(extra='allow', frozen=True)

    secrets: Annotated[Optional[dict[str, str]], _not_null("object")] = None
    voice: Annotated[Optional[VoiceSettings], _not_null("object")] = None


class StyleConfig(BaseModel):
    """Style directives grouped by context."""

    model_config = ConfigDict(extra='ignore', frozen=True)

    all: list[str] = Field(min_length=1)
    chat: list[str] = Field(min_length=1)
    post: list[str] = Field(min_length=1)


class CharacterConfig(BaseModel):
    """Complete character configuration."""

    model_config = ConfigDict(extra='ignore', frozen=True, protected_namespaces=())

    # Identity
    name: str
    plugins: Annotated[Optional[list[str]], _not_null("array")] = None
    clients: list[ClientName] = Field(min_length=1)
    model_provider: str = Field(alias="modelProvider")
    settings: Annotated[Optional[CharacterSettings], _not_null("object")] = None
    system: Annotated[Optional[str], _not_null("string")] = None

    # Persona
    bio: list[str] = Field(min_length=1)
    lore: list[str] = Field(min_length=1)
    message_examples: list[Conversation] = Field(alias="messageExamples", min_length=1)
    post_examples: list[str] = Field(alias="postExamples", min_length=1)
    adjectives: list[str] = Field(min_length=1)
    topics: list[str] = Field(min_length=1)
    knowledge: Annotated[Optional[list[str]], _not_null("array")] = None
    style: StyleConfig

    @field_validator('model_provider')
    @classmethod
    def check_model_provider(cls, v: str, info: ValidationInfo) -> str:
        """Apply the configured provider allow-list, if any."""
        rules = _rules_from(info)
        if rules is not None and rules.allowed_model_providers and v not in rules.allowed_model_providers:
            raise _enum_error(rules.allowed_model_providers, v)
        return v

    @property
    def settings_model(self) -> Optional[str]:
        """Free-form ``settings.model`` value, when the file sets one."""
        if self.settings is None or not self.settings.model_extra:
            return None
        model = self.settings.model_extra.get("model")
        return model if isinstance(model, str) else None
