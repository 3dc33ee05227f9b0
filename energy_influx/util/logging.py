import logging
import sys


def setup_logging(debug: bool = False, quiet: bool = False):
    """
    Configure root logger for tests and one-off scripts.
    """
    level = logging.DEBUG if debug else logging.INFO
    if quiet:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    return logging.getLogger("energy_influx")


def get_logger(name: str) -> logging.Logger:
    """
    Child logger of the ``energy_influx`` tree that obeys the global setup.
    """
    if name.startswith("energy_influx"):
        return logging.getLogger(name)
    return logging.getLogger(f"energy_influx.{name}")
