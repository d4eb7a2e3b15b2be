import logging
import sys

from pythonjsonlogger.json import JsonFormatter

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level="INFO", json=True):
    handler = logging.StreamHandler(sys.stderr)
    if json:
        handler.setFormatter(JsonFormatter(PLAIN_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    root = logging.getLogger()
    root.setLevel(level)
    # Replace earlier handlers so repeated CLI invocations don't duplicate output
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
