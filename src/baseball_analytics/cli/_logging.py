import logging
import sys

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"


def _level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr so table output on stdout stays clean.

    ``verbose`` wins over ``quiet`` and enables the per-lookup DEBUG records.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_level(verbose, quiet))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)
