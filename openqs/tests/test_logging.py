import logging

import pytest

import openqs
from openqs.logging_utils import get_logger


@pytest.fixture
def fresh_name(request):
    name = "openqs.tests." + request.node.name
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


def test_default_level_is_warn(fresh_name):
    openqs.settings.debug = False
    assert get_logger(fresh_name).level == logging.WARN


def test_debug_level(fresh_name):
    openqs.settings.debug = True
    assert get_logger(fresh_name).level == logging.DEBUG


def test_stream_handler_added_once(fresh_name):
    openqs.settings.log_handler = "stream"
    get_logger(fresh_name)
    logger = get_logger(fresh_name)
    streams = [h for h in logger.handlers
               if isinstance(h, logging.StreamHandler)]
    assert len(streams) == 1
    assert logger.propagate is False


def test_null_handler(fresh_name):
    openqs.settings.log_handler = "null"
    logger = get_logger(fresh_name)
    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)


def test_name_defaults_to_calling_module():
    openqs.settings.log_handler = "null"
    assert get_logger().name == __name__


def test_debug_messages_of_solvers(caplog):
    import numpy as np
    import qutip
    from openqs.evolution import master

    logger = logging.getLogger("openqs.evolution")
    logger.setLevel(logging.DEBUG)
    logger.propagate = True
    try:
        with caplog.at_level(logging.DEBUG, logger="openqs.evolution"):
            master(np.linspace(0, 1, 3), qutip.basis(2, 0), qutip.sigmaz())
        assert any("master" in record.getMessage()
                   for record in caplog.records)
    finally:
        logger.propagate = False
        logger.setLevel(logging.WARN)
