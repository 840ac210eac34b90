class Token:
    def __init__(self, type, value=None, lexeme="", pos=0, line=1, column=1):
        self.type = type
        self.value = value      # literal value for NUMBER / STRING / BOOL, name for IDENT
        self.lexeme = lexeme    # source text the token was read from
        self.pos = pos          # 0-based offset into the source
        self.line = line
        self.column = column

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        # bool is an int subclass, so compare the value types too
        return (
            self.type == other.type
            and type(self.value) is type(other.value)
            and self.value == other.value
        )

    def __hash__(self):
        return hash((self.type, self.value))

    def __repr__(self):
        if self.value is not None:
            return f"{self.type}({self.value!r})"
        return f"{self.type}"


# keyword text -> token type
KEYWORDS = {
    "true": "BOOL",
    "false": "BOOL",
    "and": "AND",
    "or": "OR",
    "print": "PRINT",
    "dup": "DUP",
    "swap": "SWAP",
    "drop": "DROP",
    "bind": "BIND",
    "if": "IF",
    "elif": "ELIF",
    "else": "ELSE",
    "while": "WHILE",
    "proc": "PROC",
    "call": "CALL",
    "do": "DO",
    "end": "END",
}

BOOL_VALUES = {"true": True, "false": False}

SINGLE_CHAR_OPS = {
    "+": "PLUS",
    "-": "MINUS",
    "*": "STAR",
    "/": "SLASH",
    "%": "PERCENT",
}

# tokens that close (or continue) a block; never valid as a standalone statement
BLOCK_TOKENS = ("DO", "ELIF", "ELSE", "END")

# tokens that open a block which must be closed by END
BLOCK_OPENERS = ("IF", "WHILE", "PROC")


def eof(pos=0, line=1, column=1):
    return Token("EOF", lexeme="", pos=pos, line=line, column=column)
