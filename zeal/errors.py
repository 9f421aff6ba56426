class ZealError(Exception):
    """ Base class for all zeal errors"""

    def __init__(self, message: str, location=None):
        self.message = message
        self.location = location
        super().__init__(self._render())

    def _render(self) -> str:
        if self.location is None:
            return self.message
        return f"{self.location}: {self.message}"

    def at(self, location) -> "ZealError":
        """Attach a source location if the error does not carry one yet."""
        if self.location is None and location is not None:
            self.location = location
            self.args = (self._render(),)
        return self


class ZealLexError(ZealError):
    """ Raised when the scanner cannot turn source text into tokens"""


class ZealSyntaxError(ZealError):
    """ Raised when there is a syntax error"""


class ZealRuntimeError(ZealError):
    """ Base class for errors raised while evaluating statements"""


class ZealNameError(ZealRuntimeError):
    """ Raised when a name is read before it is defined"""


class ZealUnboundSymbol(ZealRuntimeError):
    """ Raised when assigning to a name that no enclosing scope defines"""


class ZealTypeError(ZealRuntimeError):
    """ Raised when the types of operands or callees are incorrect"""


class ZealArityError(ZealRuntimeError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class ZealOverflowError(ZealRuntimeError):
    """ Raised when integer arithmetic leaves the signed 32-bit range"""


class ZealZeroDivisionError(ZealRuntimeError):
    """ Raised on integer division or modulo by zero"""


class ZealRecursionError(ZealRuntimeError):
    """ Raised when evaluation exhausts the call depth"""
