from literals import format_literal, same_literal


class ASTNode:
    # Optional source line (1-based). Parser may set this.
    line: int | None = None

    def fields(self):
        return {k: v for k, v in vars(self).items() if k != "line"}

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.fields() == other.fields()

    __hash__ = None

    def __repr__(self):
        args = ", ".join(f"{v!r}" for v in self.fields().values())
        return f"{self.__class__.__name__}({args})"


class Literal(ASTNode):
    def __init__(self, value):
        self.value = value  # float, str or bool

    def __eq__(self, other):
        if not isinstance(other, Literal):
            return NotImplemented
        return same_literal(self.value, other.value)

    def __str__(self):
        if isinstance(self.value, str):
            return f'"{self.value}"'
        return format_literal(self.value)


class Var(ASTNode):
    def __init__(self, name):
        self.name = name

    def __str__(self):
        return self.name


class Push(ASTNode):
    def __init__(self, value):
        self.value = value  # Literal | Var

    def __str__(self):
        return str(self.value)


class UnaryOp(ASTNode):
    # print, dup, drop
    def __init__(self, op):
        self.op = op

    def __str__(self):
        return self.op


class BinaryOp(ASTNode):
    # + - * / % > >= < <= == != and or swap
    def __init__(self, op):
        self.op = op

    def __str__(self):
        return self.op


class Bind(ASTNode):
    def __init__(self, name):
        self.name = name

    def __str__(self):
        return f"bind {self.name}"


class If(ASTNode):
    def __init__(self, conditions, then_body, elifs=None, else_body=None):
        self.conditions = conditions    # list[stmt], must leave a bool
        self.then_body = then_body      # list[stmt]
        self.elifs = elifs or []        # list[(conditions, body)]
        self.else_body = else_body or []

    def __str__(self):
        return "if"


class While(ASTNode):
    def __init__(self, conditions, body):
        self.conditions = conditions
        self.body = body

    def __str__(self):
        return "while"


class Procedure(ASTNode):
    def __init__(self, name, body):
        self.name = name
        self.body = body

    def __str__(self):
        return f"proc {self.name}"


class Call(ASTNode):
    def __init__(self, name):
        self.name = name

    def __str__(self):
        return f"call {self.name}"


class Empty(ASTNode):
    def __init__(self):
        pass

    def __str__(self):
        return "<end>"
