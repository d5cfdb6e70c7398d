"""
Shared schema building blocks.

The public API speaks camelCase JSON while the models use snake_case, so
every schema derives from ``CamelModel``.
"""

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

from app.time_utils import as_utc

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]

# Always UTC with an explicit offset, whatever the client sent or the database returned
UTCDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
        validate_default=True,
    )


class UserRef(CamelModel):
    id: uuid.UUID
    name: str


class UserContact(CamelModel):
    id: uuid.UUID
    name: str
    email: str


class ProjectRef(CamelModel):
    id: uuid.UUID
    name: str


class TaskRef(CamelModel):
    id: uuid.UUID
    title: str


class TaskSummary(CamelModel):
    id: uuid.UUID
    title: str
    status: str


class MessageResponse(CamelModel):
    message: str
