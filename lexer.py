from errors import InvalidString, StringNotTerminated
from literals import to_f32
from tokens import BOOL_VALUES, KEYWORDS, SINGLE_CHAR_OPS, Token

DIGITS = "0123456789"


class Lexer:
    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.current_char = text[0] if text else None
        self.line = 1
        self.column = 1

    def advance(self):
        # track line/column based on current_char before moving
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1
        if self.pos >= len(self.text):
            self.current_char = None
        else:
            self.current_char = self.text[self.pos]

    def peek(self):
        nxt = self.pos + 1
        if nxt >= len(self.text):
            return None
        return self.text[nxt]

    def skip_whitespace(self):
        skipped = False
        while self.current_char is not None and self.current_char.isspace():
            self.advance()
            skipped = True
        return skipped

    def skip_comment(self):
        if self.current_char != "/" or self.peek() != "/":
            return False
        while self.current_char is not None and self.current_char != "\n":
            self.advance()
        return True

    def make_token(self, type, start, line, column, value=None):
        return Token(type, value, lexeme=self.text[start:self.pos], pos=start, line=line, column=column)

    def read_identifier(self):
        start, line, column = self.pos, self.line, self.column
        while self.current_char is not None and (self.current_char.isalnum() or self.current_char == "_"):
            self.advance()

        text = self.text[start:self.pos]
        token_type = KEYWORDS.get(text)
        if token_type is None:
            return self.make_token("IDENT", start, line, column, value=text)
        return self.make_token(token_type, start, line, column, value=BOOL_VALUES.get(text))

    def read_number(self):
        start, line, column = self.pos, self.line, self.column
        while self.current_char is not None and self.current_char in DIGITS:
            self.advance()

        if self.current_char == ".":
            self.advance()
            while self.current_char is not None and self.current_char in DIGITS:
                self.advance()

        text = self.text[start:self.pos]
        return self.make_token("NUMBER", start, line, column, value=to_f32(float(text)))

    def read_string(self):
        start, line, column = self.pos, self.line, self.column
        self.advance()  # skip opening quote

        # no escapes: everything up to the next quote is taken as-is
        while self.current_char is not None and self.current_char != '"':
            self.advance()

        if self.current_char is None:
            raise StringNotTerminated(start)

        value = self.text[start + 1:self.pos]
        self.advance()  # skip closing quote
        return self.make_token("STRING", start, line, column, value=value)

    def read_comparison(self):
        # > and < need whitespace (or end of input) after them unless followed by =
        start, line, column = self.pos, self.line, self.column
        char = self.current_char
        self.advance()

        if self.current_char == "=":
            self.advance()
            return self.make_token("GTE" if char == ">" else "LTE", start, line, column)
        if self.current_char is None or self.current_char.isspace():
            return self.make_token("GT" if char == ">" else "LT", start, line, column)

        raise InvalidString(char + self.current_char, start, line, column)

    def read_equality(self):
        # = and ! only exist as == and !=
        start, line, column = self.pos, self.line, self.column
        char = self.current_char
        self.advance()

        if self.current_char == "=":
            self.advance()
            return self.make_token("EQEQ" if char == "=" else "NOTEQ", start, line, column)

        fragment = char + (self.current_char or "")
        raise InvalidString(fragment, start, line, column)

    def get_next_token(self):
        while self.skip_comment() or self.skip_whitespace():
            pass

        char = self.current_char
        if char is None:
            return Token("EOF", lexeme="", pos=self.pos, line=self.line, column=self.column)

        if char in SINGLE_CHAR_OPS:
            start, line, column = self.pos, self.line, self.column
            self.advance()
            return self.make_token(SINGLE_CHAR_OPS[char], start, line, column)

        if char in "<>":
            return self.read_comparison()

        if char in "=!":
            return self.read_equality()

        if char in DIGITS:
            return self.read_number()

        if char == '"':
            return self.read_string()

        if char.isascii() and char.isalpha():
            return self.read_identifier()

        raise InvalidString(char, self.pos, self.line, self.column)

    def tokenize(self):
        tokens = []
        while True:
            tok = self.get_next_token()
            tokens.append(tok)
            if tok.type == "EOF":
                return tokens


def tokenize(source):
    return Lexer(source).tokenize()
