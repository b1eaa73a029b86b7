"""Configuration management for content_duplicator.

This module provides the DuplicatorConfig class describing one duplication
run. It can be built directly, from command-line arguments, or through
hydra-zen.

The configuration handles:
    - Space and environment selection (source and target)
    - The records to duplicate and the exclude list
    - Naming rules (prefix, suffix, regex substitution)
    - Publish, single-level and cycle handling switches
    - Logging level and HTTP timeout

Integration with hydra-zen:
    A structured config `DuplicatorConf` is registered in hydra-zen's store
    under group 'duplicator', name 'default'.

Example:
    Programmatic configuration:
        >>> config = DuplicatorConfig(
        ...     space_id='my-space',
        ...     entry_ids=['5KsDBWseXY6QegucYAoacS'],
        ...     prefix='Copy of ',
        ... )

    With hydra-zen:
        >>> from hydra_zen import instantiate
        >>> config = instantiate(DuplicatorConf(space_id='my-space', suffix=' (2)'))
"""

from __future__ import annotations

import logging
import re

from hydra_zen import builds, store
from pydantic import BaseModel, field_validator, model_validator

from content_duplicator.core.constants import DEFAULT_ENVIRONMENT
from content_duplicator.core.enums import CycleStrategy, LinkType
from content_duplicator.core.validation import STRICT_VALIDATION_CONFIG


class DuplicatorConfig(BaseModel):
    """Configuration model for a duplication run.

    Attributes:
        space_id: Space holding the source environment.
        environment: Source environment. Defaults to 'master'.
        target_environment: Environment the clones are created in. Defaults
            to `environment`.
        token: Content Management API token. If None, read from the
            CONTENTFUL_MANAGEMENT_TOKEN environment variable.
        entry_ids: Ids of the root records to duplicate.
        asset: True if the roots are assets rather than entries.
        publish: Publish clones of published records. Defaults to True.
        exclude: Ids never duplicated.
        single_level: Only duplicate the roots.
        prefix: Prefix of cloned names, titles and slugs.
        suffix: Suffix of cloned names, titles and slugs.
        regex: Pattern replaced in cloned names, titles and slugs.
        replace_str: Replacement for `regex`.
        cycle_strategy: What to do with link cycles. Defaults to failing the run.
        timeout: Seconds to wait for each HTTP response.
        logging_level: Level of the content_duplicator logger.
    """

    model_config = STRICT_VALIDATION_CONFIG

    space_id: str
    environment: str = DEFAULT_ENVIRONMENT
    target_environment: str | None = None
    token: str | None = None
    entry_ids: tuple[str, ...] = ()
    asset: bool = False
    publish: bool = True
    exclude: tuple[str, ...] = ()
    single_level: bool = False
    prefix: str = ""
    suffix: str = ""
    regex: str | None = None
    replace_str: str | None = None
    cycle_strategy: CycleStrategy = CycleStrategy.fail
    timeout: float = 30.0
    logging_level: int = logging.WARNING

    @field_validator("regex")
    @classmethod
    def check_regex(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"Invalid regex {value!r}: {e}") from e
        return value

    @model_validator(mode="after")
    def default_target_environment(self) -> "DuplicatorConfig":
        """Clone into the source environment unless told otherwise."""
        if self.target_environment is None:
            self.target_environment = self.environment
        return self

    @property
    def link_type(self) -> LinkType:
        return LinkType.asset if self.asset else LinkType.entry

    @property
    def same_environment(self) -> bool:
        return self.target_environment == self.environment


# =============================================================================
# Hydra Integration
# =============================================================================

# Lists from hydra configs reach the model as plain Python lists
DuplicatorConf = builds(DuplicatorConfig, populate_full_signature=True, hydra_convert="all")

store(DuplicatorConf, group="duplicator", name="default")
