import sys

from ast_nodes import Literal, Var, Push, UnaryOp, BinaryOp, Bind, If, While, Procedure, Call, Empty
from errors import (
    CallDepthExceeded,
    IdentifierNotFound,
    InvalidOperation,
    ProcedureNotFound,
    StackUnderflow,
    StepLimitExceeded,
)
from literals import binary_op, format_literal, is_bool, kind_of

MAX_CALL_DEPTH = 1000

# python frames used per nested call, with room for if/while bodies in between
FRAMES_PER_CALL = 10

# operation names used in stack underflow messages
OP_NAMES = {
    "print": "Printing",
    "dup": "Duping",
    "drop": "Dropping",
    "+": "Addition",
    "-": "Subtraction",
    "*": "Multiplication",
    "/": "Division",
    "%": "Modulo",
    ">": "Comparison",
    ">=": "Comparison",
    "<": "Comparison",
    "<=": "Comparison",
    "==": "Comparison",
    "!=": "Comparison",
    "and": "Logical and",
    "or": "Logical or",
    "swap": "Swapping",
}


class Interpreter:
    """Tree-walking evaluator for parsed statements.

    State (stack, variables, procedures) lives on the instance and survives
    between `interpret` calls, so one interpreter can serve a whole REPL session.
    """

    def __init__(self, output=None, max_call_depth: int | None = MAX_CALL_DEPTH,
                 max_steps: int | None = None, trace: bool = False):
        self.output = output                  # file-like; None means sys.stdout
        self.max_call_depth = max_call_depth
        self.max_steps = max_steps            # set to an int to guard against infinite loops
        self.trace_enabled = trace

        self.stack = []        # operand stack, top is the last item
        self.variables = {}    # name -> literal
        self.procedures = {}   # name -> list[stmt]

        self.call_depth = 0
        self.steps = 0

    def reset(self):
        self.stack.clear()
        self.variables.clear()
        self.procedures.clear()
        self.call_depth = 0
        self.steps = 0

    def interpret(self, statements):
        self.call_depth = 0
        self.steps = 0
        limit = sys.getrecursionlimit()
        if self.max_call_depth is not None:
            sys.setrecursionlimit(max(limit, self.max_call_depth * FRAMES_PER_CALL + 1000))
        try:
            self.execute(statements)
        except RecursionError:
            raise CallDepthExceeded() from None
        finally:
            sys.setrecursionlimit(limit)

    # ---------- helpers ----------
    def write(self, text):
        print(text, file=self.output, flush=True)

    def pop(self, operation: str, required: int = 1):
        if not self.stack:
            raise StackUnderflow(operation, required)
        return self.stack.pop()

    def pop_pair(self, operation: str):
        # pops (first, second); second was on top
        second = self.pop(operation, 2)
        if not self.stack:
            self.stack.append(second)
            raise StackUnderflow(operation, 2)
        first = self.stack.pop()
        return first, second

    def pop_condition(self, context: str) -> bool:
        if not self.stack:
            raise InvalidOperation(f"{context} condition must leave a boolean on the stack")
        value = self.stack.pop()
        if not is_bool(value):
            self.stack.append(value)
            raise InvalidOperation(f"{context} condition must be a boolean, got {kind_of(value)}")
        return value

    # ---------- statements ----------
    def execute(self, statements):
        for stmt in statements:
            self.execute_statement(stmt)

    def execute_statement(self, stmt):
        if self.max_steps is not None:
            self.steps += 1
            if self.steps > self.max_steps:
                raise StepLimitExceeded(self.max_steps)

        if self.trace_enabled:
            self.write(f"TRACE {stmt} stack={len(self.stack)}")

        if isinstance(stmt, Push):
            self.execute_push(stmt)
        elif isinstance(stmt, UnaryOp):
            self.execute_unary(stmt.op)
        elif isinstance(stmt, BinaryOp):
            self.execute_binary(stmt.op)
        elif isinstance(stmt, Bind):
            value = self.pop("Binding")
            self.variables[stmt.name] = value
            self.procedures.pop(stmt.name, None)
        elif isinstance(stmt, If):
            self.execute_if(stmt)
        elif isinstance(stmt, While):
            self.execute_while(stmt)
        elif isinstance(stmt, Procedure):
            self.procedures[stmt.name] = list(stmt.body)
            self.variables.pop(stmt.name, None)
        elif isinstance(stmt, Call):
            self.execute_call(stmt.name)
        elif isinstance(stmt, Empty):
            pass
        else:
            raise TypeError(f"Unknown statement: {stmt!r}")

    def execute_push(self, stmt):
        value = stmt.value
        if isinstance(value, Literal):
            self.stack.append(value.value)
        elif isinstance(value, Var):
            if value.name not in self.variables:
                raise IdentifierNotFound(value.name)
            self.stack.append(self.variables[value.name])
        else:
            raise TypeError(f"Cannot push {value!r}")

    def execute_unary(self, op):
        value = self.pop(OP_NAMES[op], 1)
        if op == "print":
            self.write(format_literal(value))
        elif op == "dup":
            self.stack.append(value)
            self.stack.append(value)
        elif op == "drop":
            pass
        else:
            raise TypeError(f"Unknown unary operation: {op}")

    def execute_binary(self, op):
        first, second = self.pop_pair(OP_NAMES[op])

        if op == "swap":
            self.stack.append(second)
            self.stack.append(first)
            return

        try:
            result = binary_op(op, first, second)
        except InvalidOperation:
            # leave the operands where they were
            self.stack.append(first)
            self.stack.append(second)
            raise
        self.stack.append(result)

    def execute_if(self, stmt):
        self.execute(stmt.conditions)
        if self.pop_condition("if"):
            self.execute(stmt.then_body)
            return

        for conditions, body in stmt.elifs:
            self.execute(conditions)
            if self.pop_condition("elif"):
                self.execute(body)
                return

        self.execute(stmt.else_body)

    def execute_while(self, stmt):
        while True:
            self.execute(stmt.conditions)
            if not self.pop_condition("while"):
                break
            self.execute(stmt.body)

    def execute_call(self, name):
        if name not in self.procedures:
            raise ProcedureNotFound(name)
        if self.max_call_depth is not None and self.call_depth >= self.max_call_depth:
            raise CallDepthExceeded(self.max_call_depth)

        body = list(self.procedures[name])
        self.call_depth += 1
        try:
            self.execute(body)
        finally:
            self.call_depth -= 1
