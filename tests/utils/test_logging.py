import logging
import pytest
from csim.errors import ConfigurationError
from csim.utils.logging import set_log_level


@pytest.fixture(autouse=True)
def restore_level():
    logger = logging.getLogger("csim")
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.mark.parametrize("level, expected", [("debug", logging.DEBUG), ("WARNING", logging.WARNING),
                                             (logging.ERROR, logging.ERROR)])
def test_set_log_level(level, expected):
    set_log_level(level)
    assert logging.getLogger("csim").level == expected


@pytest.mark.parametrize("level", ["LOUD", "Level 5", None, True])
def test_set_log_level_rejects_unknown(level):
    with pytest.raises(ConfigurationError):
        set_log_level(level)
