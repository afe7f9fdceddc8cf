import logging

import pytest

from employee_directory.core.logging_config import HANDLER_NAME, setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_installs_a_single_handler(root_logger):
    setup_logging("DEBUG")
    setup_logging("WARNING")

    ours = [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]
    assert len(ours) == 1
    assert root_logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info(root_logger):
    setup_logging("chatty")
    assert root_logger.level == logging.INFO
