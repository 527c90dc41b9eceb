"""
Run doctests defined in the client library.
"""

import doctest
import sys
from types import ModuleType
from typing import NoReturn

import pytest

from titan import command, terminal, view
from titan.client import client, constants, rwlock, urls
from titan.text import format as text_format
from titan.text import parser, wrap

MODULES = [
    client,
    constants,
    rwlock,
    urls,
    parser,
    text_format,
    wrap,
    command,
    terminal,
    view,
]


@pytest.mark.parametrize("mod", MODULES, ids=lambda mod: mod.__name__)
def test_doctests(mod: ModuleType):
    result = doctest.testmod(mod, optionflags=doctest.NORMALIZE_WHITESPACE)
    assert result.failed == 0


def main() -> NoReturn:
    """
    Run doctests defined in the client library.
    """
    success = True
    for mod in MODULES:
        result = doctest.testmod(mod, optionflags=doctest.NORMALIZE_WHITESPACE)
        if result.failed:
            success = False

    if not success:
        sys.exit(1)
    else:
        sys.exit(0)


if __name__ == "__main__":
    main()
