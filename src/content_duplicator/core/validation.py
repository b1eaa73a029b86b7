"""Shared Pydantic configuration for content_duplicator.

The module provides:
    - RECORD_CONFIG: ConfigDict for models parsed from Management API payloads
    - STRICT_VALIDATION_CONFIG: ConfigDict for models built from user input,
      which reject unknown fields

Example:
    >>> from content_duplicator.core.validation import STRICT_VALIDATION_CONFIG
    >>> from pydantic import BaseModel
    >>>
    >>> class Options(BaseModel):
    ...     model_config = STRICT_VALIDATION_CONFIG
    ...     prefix: str = ""
"""

from pydantic import ConfigDict

# Payloads from the Management API carry many keys we do not model.
RECORD_CONFIG = ConfigDict(
    arbitrary_types_allowed=True,
    populate_by_name=True,
    extra="ignore",
)

# Configuration for models that should be strict about extra fields
STRICT_VALIDATION_CONFIG = ConfigDict(
    arbitrary_types_allowed=True,
    # Validate default values during model creation
    validate_default=True,
    extra="forbid",  # Raise error if extra fields provided
)

__all__ = [
    "RECORD_CONFIG",
    "STRICT_VALIDATION_CONFIG",
]
