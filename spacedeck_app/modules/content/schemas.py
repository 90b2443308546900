# File: spacedeck_app/modules/content/schemas.py
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from spacedeck_app.core.error_handlers import ValidationError

T = TypeVar('T', bound=BaseModel)


def _not_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError('must not be blank')
    return value


class CollectionCreate(BaseModel):
    model_config = ConfigDict(extra='ignore')

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, value):
        return _not_blank(value).strip()


class CardCreate(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    collection_id: str = Field(alias='collectionId', min_length=1)
    front: str = Field(min_length=1)  # Markdown
    back: str = Field(min_length=1)  # Markdown

    @field_validator('front', 'back')
    @classmethod
    def content_not_blank(cls, value):
        return _not_blank(value)


class CardUpdate(BaseModel):
    model_config = ConfigDict(extra='ignore')

    front: Optional[str] = Field(default=None, min_length=1)
    back: Optional[str] = Field(default=None, min_length=1)

    @field_validator('front', 'back')
    @classmethod
    def content_not_blank(cls, value):
        return _not_blank(value)


def parse_payload(schema: Type[T], data: Any) -> T:
    """Validate a JSON body against ``schema`` or raise a 400 ValidationError."""
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        errors: Dict[str, str] = {
            '.'.join(str(part) for part in err['loc']): err['msg']
            for err in e.errors()
        }
        raise ValidationError('Invalid request body', errors=errors) from None
