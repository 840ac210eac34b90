import pytest

from ast_nodes import Literal, Var, Push, UnaryOp, BinaryOp, Bind, If, While, Procedure, Call, Empty
from errors import UnexpectedToken
from lexer import Lexer
from parser import Parser


def parse(source):
    return Parser(Lexer(source).tokenize()).parse()


def test_program_ends_with_empty():
    assert parse("") == [Empty()]
    assert parse("2 3 + print") == [
        Push(Literal(2.0)), Push(Literal(3.0)), BinaryOp("+"), UnaryOp("print"), Empty(),
    ]


def test_push_identifier_and_literals():
    assert parse('x "s" true') == [
        Push(Var("x")), Push(Literal("s")), Push(Literal(True)), Empty(),
    ]


def test_literal_kinds_are_distinguished():
    assert Push(Literal(1.0)) != Push(Literal(True))


def test_operator_tables():
    ops = [s.op for s in parse("+ - * / % > >= < <= == != and or swap")[:-1]]
    assert ops == ["+", "-", "*", "/", "%", ">", ">=", "<", "<=", "==", "!=", "and", "or", "swap"]
    assert [s.op for s in parse("print dup drop")[:-1]] == ["print", "dup", "drop"]


def test_bind_and_call():
    assert parse("10 bind x call p") == [Push(Literal(10.0)), Bind("x"), Call("p"), Empty()]


def test_if_elif_else():
    stmts = parse('if x 1 == do "one" elif x 2 == do "two" else do "many" end')
    assert len(stmts) == 2
    node = stmts[0]
    assert isinstance(node, If)
    assert node.conditions == [Push(Var("x")), Push(Literal(1.0)), BinaryOp("==")]
    assert node.then_body == [Push(Literal("one"))]
    assert node.elifs == [([Push(Var("x")), Push(Literal(2.0)), BinaryOp("==")], [Push(Literal("two"))])]
    assert node.else_body == [Push(Literal("many"))]


def test_if_without_else():
    node = parse("if true do end")[0]
    assert node.then_body == []
    assert node.elifs == []
    assert node.else_body == []


def test_while_and_nested_blocks():
    node = parse("while i 3 < do if true do i print end i 1 + bind i end")[0]
    assert isinstance(node, While)
    assert node.conditions == [Push(Var("i")), Push(Literal(3.0)), BinaryOp("<")]
    assert isinstance(node.body[0], If)
    assert node.body[1:] == [Push(Var("i")), Push(Literal(1.0)), BinaryOp("+"), Bind("i")]


def test_procedure():
    assert parse("proc p do x 1 + end")[0] == Procedure("p", [Push(Var("x")), Push(Literal(1.0)), BinaryOp("+")])


def test_missing_end_reports_eof():
    with pytest.raises(UnexpectedToken) as info:
        parse("while true do 1")
    assert info.value.token.type == "EOF"
    assert info.value.expected == ("END",)


def test_missing_do_reports_eof():
    with pytest.raises(UnexpectedToken) as info:
        parse("if 1 2 >")
    assert info.value.token.type == "EOF"
    assert info.value.expected == ("DO",)


def test_stray_terminators():
    for source in ("end", "1 do", "else do end", "elif"):
        with pytest.raises(UnexpectedToken):
            parse(source)


def test_else_requires_do():
    with pytest.raises(UnexpectedToken) as info:
        parse("if true do 1 else 2 end")
    assert info.value.token.type == "NUMBER"
    assert info.value.expected == ("DO",)


def test_bind_requires_identifier():
    with pytest.raises(UnexpectedToken) as info:
        parse("bind 5")
    assert str(info.value) == "Unexpected Token: NUMBER"

    with pytest.raises(UnexpectedToken):
        parse("call print")


def test_parser_appends_missing_eof():
    tokens = Lexer("1 print").tokenize()[:-1]
    assert Parser(tokens).parse()[-1] == Empty()


def test_statements_record_lines():
    stmts = parse("1\n2\nprint")
    assert [s.line for s in stmts[:-1]] == [1, 2, 3]
