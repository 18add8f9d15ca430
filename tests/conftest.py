"""
Global test configuration fixtures for tzstamp tests.

This module provides fixed timezone providers, instants and configuration
objects, and resets process-wide state (translations, logging handlers)
between tests.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import datetime
from pathlib import Path

import pytest

from tzstamp import i18n
from tzstamp.config.schema import TzStampConfig
from tzstamp.core.catalog import StaticTimezoneProvider
from tests.utils.test_helpers import (
    SAMPLE_IDENTIFIERS,
    SUMMER_INSTANT,
    WINTER_INSTANT,
    copy_locale_dir,
)


@pytest.fixture(autouse=True)
def reset_translations() -> Generator[None, None, None]:
    """Run every test with English messages and the packaged locale directory."""
    i18n.setup_i18n(i18n.DEFAULT_LANGUAGE, locale_dir=i18n.PACKAGED_LOCALE_DIR)
    yield
    i18n.setup_i18n(i18n.DEFAULT_LANGUAGE, locale_dir=i18n.PACKAGED_LOCALE_DIR)


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Restore root logger handlers and level after a test reconfigures logging."""
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        if handler not in original_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(original_level)


@pytest.fixture
def sample_provider() -> StaticTimezoneProvider:
    """Provider serving the fixed sample identifiers."""
    return StaticTimezoneProvider(SAMPLE_IDENTIFIERS)


@pytest.fixture
def summer_instant() -> datetime:
    """2024-07-15 12:00 UTC."""
    return SUMMER_INSTANT


@pytest.fixture
def winter_instant() -> datetime:
    """2024-01-15 12:00 UTC."""
    return WINTER_INSTANT


@pytest.fixture
def base_config() -> TzStampConfig:
    """Configuration with every default."""
    return TzStampConfig()


@pytest.fixture
def zh_tw_locale(tmp_path: Path) -> Path:
    """A writable copy of the packaged locale directory."""
    return copy_locale_dir(tmp_path)
