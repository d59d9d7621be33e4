import logging

import zkschnorr
import zkschnorr.utils


def test_metadata():
    assert zkschnorr.__title__ == "zkschnorr"
    assert zkschnorr.__author__ == "zkschnorr developers"


def test_utils_exports():
    assert set(name for name in dir(zkschnorr.utils) if not name.startswith("_")) >= {
        "random_in_range",
        "ensure_bn",
        "ladder_pow",
        "encode_int",
    }
    assert not hasattr(zkschnorr.utils, "get_random_num")


def test_package_logger_is_silent_by_default():
    handlers = logging.getLogger("zkschnorr").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
