import sys
from typing import Optional, Callable, NoReturn

from . import DebInfoError

err_msg = str | DebInfoError | OSError


def warn(s: err_msg) -> None:
    print("warning: " + str(s), file=sys.stderr)


def fatal(msg: err_msg, help: Optional[Callable] = None) -> NoReturn:
    print("error: " + str(msg), file=sys.stderr)
    if help:
        help()
    sys.exit(1)
