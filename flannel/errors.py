from typing import Any


TYPE_MISMATCH = 'TypeMismatch'
MALFORMED_LITERAL = 'MalformedLiteral'
UNSUPPORTED_OPERATOR = 'UnsupportedOperator'
UNKNOWN_TYPE = 'UnknownType'
UNKNOWN_FUNCTION = 'UnknownFunction'
UNBOUND_VARIABLE = 'UnboundVariable'
UNKNOWN_METHOD = 'UnknownMethod'
UNKNOWN_PROPERTY = 'UnknownProperty'
ARGUMENT_MISMATCH = 'ArgumentMismatch'
DIVISION_BY_ZERO = 'DivisionByZero'
INVALID_CONVERSION = 'InvalidConversion'
INVALID_CONSTRUCTION = 'InvalidConstruction'
INVALID_INHERITANCE = 'InvalidInheritance'
END_OF_INPUT = 'EndOfInput'


class FlannelError(Exception):
    """Exception type used to abort a FlannelScript program."""
    def __init__(self, kind: str, message: str):
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message


class ProgramExit(Exception):
    """Internal exception carrying a top-level return out to the driver."""
    def __init__(self, value: Any):
        super().__init__('return')
        self.value = value
