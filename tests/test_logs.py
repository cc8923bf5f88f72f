import logging

import pytest

from lightwire.errors import ConfigurationError
from lightwire.logs import configure_logging, level_for_environment


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    "environment, level",
    [("dev", logging.DEBUG), ("Production", logging.WARNING), ("staging", logging.INFO)],
)
def test_level_follows_environment(environment, level):
    assert level_for_environment(environment) == level


def test_existing_handlers_only_get_their_level_adjusted(root_logger):
    root_logger.addHandler(logging.NullHandler())
    handlers = root_logger.handlers[:]

    configure_logging("prod", env={})

    assert root_logger.handlers == handlers
    assert root_logger.level == logging.WARNING


def test_environment_variable_overrides_level(root_logger):
    root_logger.addHandler(logging.NullHandler())

    configure_logging("prod", env={"LIGHTWIRE_LOG_LEVEL": "debug"})

    assert root_logger.level == logging.DEBUG


def test_force_installs_stderr_handler(root_logger):
    configure_logging("dev", env={}, force=True)

    assert any(isinstance(h, logging.StreamHandler) for h in root_logger.handlers)
    assert root_logger.level == logging.DEBUG


def test_unknown_level_name_raises(root_logger):
    with pytest.raises(ConfigurationError, match="Unknown log level 'loud'"):
        configure_logging("dev", env={"LIGHTWIRE_LOG_LEVEL": "loud"})
