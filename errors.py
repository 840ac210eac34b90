class PileError(Exception):
    kind = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def format(self, indent: str = "") -> str:
        return f"{indent}{self.kind}: {self.message}"

    def __str__(self) -> str:
        return self.message


# ---------- lexical ----------

class LexError(PileError):
    kind = "Lexical error"


class StringNotTerminated(LexError):
    def __init__(self, pos: int | None = None):
        super().__init__("String is not terminated before end of file")
        self.pos = pos


class InvalidString(LexError):
    def __init__(self, fragment: str, pos: int, line: int | None = None, column: int | None = None):
        super().__init__(f"Invalid string '{fragment}' at position {pos}")
        self.fragment = fragment
        self.pos = pos
        self.line = line
        self.column = column

    def format(self, indent: str = "") -> str:
        text = super().format(indent)
        if self.line is not None:
            text += f" (line {self.line}, col {self.column})"
        return text


# ---------- syntax ----------

class ParseError(PileError):
    kind = "Syntax error"


class UnexpectedToken(ParseError):
    def __init__(self, token, expected=()):
        super().__init__(f"Unexpected Token: {token.type}")
        self.token = token
        self.expected = tuple(expected)

    def format(self, indent: str = "") -> str:
        text = super().format(indent)
        if self.expected:
            text += f" (expected {' or '.join(self.expected)})"
        return text + f" at line {self.token.line}, col {self.token.column}"


# ---------- runtime ----------

class PileRuntimeError(PileError):
    kind = "Runtime error"


class StackUnderflow(PileRuntimeError):
    def __init__(self, operation: str, required: int):
        super().__init__(f"{operation} requires at least {required} items on the stack")
        self.operation = operation
        self.required = required


class InvalidOperation(PileRuntimeError):
    def __init__(self, description: str):
        super().__init__(f"Invalid operation: {description}")
        self.description = description


class IdentifierNotFound(PileRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Identifier '{name}' does not exist")
        self.name = name


class ProcedureNotFound(PileRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Procedure '{name}' does not exist")
        self.name = name


class CallDepthExceeded(PileRuntimeError):
    def __init__(self, limit: int | None = None):
        if limit is None:
            super().__init__("Maximum nesting depth exceeded")
        else:
            super().__init__(f"Maximum call depth of {limit} exceeded")
        self.limit = limit


class StepLimitExceeded(PileRuntimeError):
    def __init__(self, limit: int):
        super().__init__(f"Step limit of {limit} statements exceeded")
        self.limit = limit


# ---------- command line ----------

class SourceError(PileError):
    kind = "Error"


class NoSourceFile(SourceError):
    def __init__(self):
        super().__init__("Please provide source file")


class SourceFileNotFound(SourceError):
    def __init__(self, path: str):
        super().__init__(f"Could not find provided source file '{path}'")
        self.path = path


class TooManyArgs(SourceError):
    def __init__(self):
        super().__init__(
            "Too many arguments, either pass the source file or run with no arguments for REPL mode"
        )
