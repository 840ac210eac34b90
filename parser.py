from ast_nodes import (
    Literal, Var, Push, UnaryOp, BinaryOp, Bind, If, While, Procedure, Call, Empty,
)
from errors import ParseError, UnexpectedToken
from tokens import eof

LITERAL_TOKENS = ("NUMBER", "STRING", "BOOL")

UNARY_OPS = {
    "PRINT": "print",
    "DUP": "dup",
    "DROP": "drop",
}

BINARY_OPS = {
    "PLUS": "+",
    "MINUS": "-",
    "STAR": "*",
    "SLASH": "/",
    "PERCENT": "%",
    "GT": ">",
    "GTE": ">=",
    "LT": "<",
    "LTE": "<=",
    "EQEQ": "==",
    "NOTEQ": "!=",
    "AND": "and",
    "OR": "or",
    "SWAP": "swap",
}


class Parser:
    def __init__(self, tokens):
        tokens = list(tokens)
        if not tokens or tokens[-1].type != "EOF":
            last = tokens[-1] if tokens else None
            if last is None:
                tokens.append(eof())
            else:
                tokens.append(eof(last.pos + len(last.lexeme), last.line, last.column + len(last.lexeme)))
        self.tokens = tokens
        self.pos = 0
        self.current_token = self.tokens[0]

    def advance(self):
        if self.pos + 1 < len(self.tokens):
            self.pos += 1
            self.current_token = self.tokens[self.pos]

    # move to next token, but only if it matches what we expect
    def eat(self, token_type):
        tok = self.current_token
        if tok.type != token_type:
            raise UnexpectedToken(tok, (token_type,))
        self.advance()
        return tok

    # ---------- TOP LEVEL ----------
    def parse(self):
        statements = []
        try:
            while self.current_token.type != "EOF":
                statements.append(self.statement())
        except RecursionError:
            raise ParseError("Blocks are nested too deeply") from None

        statements.append(Empty())
        return statements

    # ---------- STATEMENTS ----------
    def statement(self):
        tok = self.current_token

        if tok.type in LITERAL_TOKENS:
            self.advance()
            node = Push(Literal(tok.value))
        elif tok.type == "IDENT":
            self.advance()
            node = Push(Var(tok.value))
        elif tok.type in UNARY_OPS:
            self.advance()
            node = UnaryOp(UNARY_OPS[tok.type])
        elif tok.type in BINARY_OPS:
            self.advance()
            node = BinaryOp(BINARY_OPS[tok.type])
        elif tok.type == "BIND":
            node = self.bind_statement()
        elif tok.type == "IF":
            node = self.if_statement()
        elif tok.type == "WHILE":
            node = self.while_statement()
        elif tok.type == "PROC":
            node = self.proc_statement()
        elif tok.type == "CALL":
            node = self.call_statement()
        else:
            # do / elif / else / end outside of the block they belong to, or EOF
            raise UnexpectedToken(tok)

        node.line = tok.line
        return node

    def statements_until(self, *terminators):
        # read statements until the cursor rests on one of the terminators
        statements = []
        while self.current_token.type not in terminators:
            if self.current_token.type == "EOF":
                raise UnexpectedToken(self.current_token, terminators)
            statements.append(self.statement())
        return statements

    def bind_statement(self):
        self.eat("BIND")
        name = self.eat("IDENT")
        return Bind(name.value)

    def if_statement(self):
        # Grammar:
        #   IF cond DO body (ELIF cond DO body)* (ELSE DO body)? END
        self.eat("IF")
        conditions = self.statements_until("DO")
        self.eat("DO")
        then_body = self.statements_until("ELIF", "ELSE", "END")

        elifs = []
        while self.current_token.type == "ELIF":
            self.eat("ELIF")
            elif_conditions = self.statements_until("DO")
            self.eat("DO")
            elif_body = self.statements_until("ELIF", "ELSE", "END")
            elifs.append((elif_conditions, elif_body))

        else_body = []
        if self.current_token.type == "ELSE":
            self.eat("ELSE")
            self.eat("DO")
            else_body = self.statements_until("END")

        self.eat("END")
        return If(conditions, then_body, elifs, else_body)

    def while_statement(self):
        self.eat("WHILE")
        conditions = self.statements_until("DO")
        self.eat("DO")
        body = self.statements_until("END")
        self.eat("END")
        return While(conditions, body)

    def proc_statement(self):
        self.eat("PROC")
        name = self.eat("IDENT")
        self.eat("DO")
        body = self.statements_until("END")
        self.eat("END")
        return Procedure(name.value, body)

    def call_statement(self):
        self.eat("CALL")
        name = self.eat("IDENT")
        return Call(name.value)


def parse(tokens):
    return Parser(tokens).parse()
