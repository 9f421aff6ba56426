from io import StringIO

import pytest

from zeal.interpreter import Interpreter


@pytest.fixture
def output():
    """Output sink handed to `print`."""
    return StringIO()


@pytest.fixture
def interp(output):
    """Fresh interpreter session writing into `output`."""
    return Interpreter(output=output)
