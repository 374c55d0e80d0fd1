"""
Base schemas and helpers shared by all models.
"""

import re
from enum import Enum
from typing import Optional, TypeVar

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


E = TypeVar("E", bound=Enum)


def lookup_enum_alias(enum_cls: type[E], value: object, aliases: Optional[dict] = None) -> Optional[E]:
    """
    Resolve loose spellings of an enum value.

    "exactTitle", "exact_title" and "EXACT-TITLE" all resolve to the
    member whose value is "exact-title". Extra aliases are matched on the
    same compacted form.
    """
    if not isinstance(value, str):
        return None

    compact = re.sub(r"[\s_-]", "", value).lower()
    for member in enum_cls:
        if re.sub(r"[\s_-]", "", member.value).lower() == compact:
            return member

    return (aliases or {}).get(compact)
