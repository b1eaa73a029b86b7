"""Tests for the run configuration and its hydra-zen integration."""

import logging

import pytest
from hydra_zen import builds, instantiate
from pydantic import ValidationError

from content_duplicator.core.config import DuplicatorConf, DuplicatorConfig
from content_duplicator.core.enums import CycleStrategy, LinkType
from content_duplicator.core.logging_config import (
    LOGGER_NAME,
    configure_logging,
    get_logger,
)


class TestDuplicatorConfig:
    def test_defaults(self):
        config = DuplicatorConfig(space_id="space")
        assert config.environment == "master"
        assert config.target_environment == "master"
        assert config.same_environment
        assert config.publish is True
        assert config.cycle_strategy == CycleStrategy.fail
        assert config.link_type == LinkType.entry

    def test_target_environment(self):
        config = DuplicatorConfig(space_id="space", environment="dev", target_environment="staging", asset=True)
        assert not config.same_environment
        assert config.link_type == LinkType.asset

    def test_invalid_regex(self):
        with pytest.raises(ValidationError):
            DuplicatorConfig(space_id="space", regex="[unclosed")

    def test_cycle_strategy_from_string(self):
        config = DuplicatorConfig(space_id="space", cycle_strategy="link-original")
        assert config.cycle_strategy == CycleStrategy.link_original


class TestHydraZenConfig:
    def test_builds_with_defaults(self):
        conf = DuplicatorConf(space_id="space")
        assert conf.space_id == "space"
        assert conf.environment == "master"
        assert conf.prefix == ""
        assert conf.publish is True

    def test_instantiate_creates_pydantic_model(self):
        conf = DuplicatorConf(space_id="space", prefix="Copy of ", exclude=["a", "b"])
        config = instantiate(conf)

        assert isinstance(config, DuplicatorConfig)
        assert config.prefix == "Copy of "
        assert config.exclude == ("a", "b")
        assert config.target_environment == "master"

    def test_builds_from_model(self):
        conf = builds(DuplicatorConfig, populate_full_signature=True, hydra_convert="all")(
            space_id="space", suffix=" (2)"
        )
        assert instantiate(conf).suffix == " (2)"


class TestLogging:
    def test_logger_names(self):
        assert get_logger().name == LOGGER_NAME
        assert get_logger("engine").name == f"{LOGGER_NAME}.engine"

    def test_configure_logging(self):
        logger = configure_logging(level=logging.INFO, http_level=logging.ERROR)
        assert logger.level == logging.INFO
        assert logging.getLogger("urllib3").level == logging.ERROR

    def test_http_loggers_follow_debug_only(self):
        configure_logging(level=logging.INFO)
        assert logging.getLogger("requests").level == logging.WARNING

        configure_logging(level=logging.DEBUG)
        assert logging.getLogger("urllib3").level == logging.DEBUG
        assert len(get_logger().handlers) == 1
