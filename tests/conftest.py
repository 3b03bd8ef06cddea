"""
Pytest Configuration and Shared Fixtures.
"""

from __future__ import annotations

import io
from typing import Any, Dict, Iterator

import pytest

from rulecheck.core.config import reset_config
from rulecheck.utils import logger as logger_module
from rulecheck.utils.logger import LogLevel, StreamHandler, TextFormatter, get_logger
from rulecheck.validation.validator import Validator


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    """Each test sees configuration built from its own environment."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def profile_data() -> Dict[str, Any]:
    """A complete, valid user profile."""
    return {
        "name": "John_Doe",
        "emails": {
            "email": "john.doe@example.com",
            "email_confirm": "john.doe@example.com",
        },
        "age": 25,
        "active": True,
        "website": "https://example.com",
        "birthdate": "1999-12-31",
        "category": "technology",
        "status": "inactive",
        "first_name": "John",
        "last_name": "Doe",
    }


@pytest.fixture
def profile_rules() -> Dict[str, str]:
    return {
        "name": "required|string|alpha_dash",
        "emails.email": "required|email",
        "emails.email_confirm": "required|email|equal:emails.email",
        "age": "required|numeric|min:18|max:60",
        "active": "required|boolean",
        "website": "required|url",
        "birthdate": "required|date",
        "category": "required|in:technology,health,education",
        "status": "required|not_in:suspended,deleted",
        "first_name": "required|alpha",
        "last_name": "required|string|max:20|min:3",
    }


@pytest.fixture
def make_validator():
    """Build a validator with rules in one call."""

    def factory(data: Dict[str, Any], rules: Dict[str, Any], **kwargs: Any) -> Validator:
        return Validator(data, rules=rules, **kwargs)

    return factory


@pytest.fixture
def validation_log() -> Iterator[io.StringIO]:
    """Capture what the validator logs, at every level."""
    logger = get_logger("rulecheck.validation")
    stream = io.StringIO()
    handler = StreamHandler(stream, formatter=TextFormatter(colors=False))
    previous_level = logger.level

    logger.add_handler(handler)
    logger.level = LogLevel.DEBUG
    yield stream
    logger.remove_handler(handler)
    logger.level = previous_level


@pytest.fixture
def restore_loggers() -> Iterator[None]:
    """Undo configure_logging() side effects."""
    saved = {
        name: (logger.level, list(logger._handlers))
        for name, logger in logger_module._loggers.items()
    }
    yield
    for name in list(logger_module._loggers):
        if name not in saved:
            del logger_module._loggers[name]
    for name, (level, handlers) in saved.items():
        logger = logger_module._loggers[name]
        logger.level = level
        logger._handlers[:] = handlers
