import logging

import energy_influx.logging as console_logging
from energy_influx.logging import ConsoleLog


def _restore(root, handlers, level):
    root.handlers.clear()
    root.handlers.extend(handlers)
    root.setLevel(level)


def test_console_log_quiet_skips_handlers():
    root = logging.getLogger()
    orig_handlers = list(root.handlers)
    orig_level = root.level
    try:
        log = ConsoleLog(level="INFO", quiet=True).setup()
        assert log.name == "energy_influx"
        assert root.handlers == []
    finally:
        _restore(root, orig_handlers, orig_level)


def test_console_log_level_and_debug_modules():
    root = logging.getLogger()
    orig_handlers = list(root.handlers)
    orig_level = root.level
    try:
        ConsoleLog(level="warning", debug_modules=["energy_influx.services.point_mapper"]).setup()
        (handler,) = root.handlers
        assert handler.level == logging.WARNING
        assert root.level == logging.DEBUG
        assert logging.getLogger("energy_influx.services.point_mapper").level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.INFO
    finally:
        _restore(root, orig_handlers, orig_level)
        logging.getLogger("energy_influx.services.point_mapper").setLevel(logging.NOTSET)


def test_console_logging_module_exports_only_console_setup():
    assert not hasattr(console_logging, "get_logger")
    assert console_logging.NOISY_LOGGERS == ("urllib3", "influxdb_client")
