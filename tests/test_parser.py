import textwrap

import pytest
from hypothesis import given, strategies as st

from zeal.errors import ZealError, ZealSyntaxError
from zeal.reader.parser import Parser, parse
from zeal.reader.scanner import scan
from zeal.reader.tokens import Token, TokenType as T
from zeal.syntax.ast import (
    Assignment,
    Binary,
    Block,
    BuiltinFunction,
    Declaration,
    FunctionCall,
    Get,
    Group,
    If,
    LambdaExpr,
    Literal,
    Unary,
    While,
)
from zeal.types.symbol import Symbol


def parse_src(source):
    return parse(scan(textwrap.dedent(source)))


def sym(name):
    return Literal(Symbol(name))


def lit(value):
    return Literal(value)


PRINT = BuiltinFunction(Token(T.PRINT))


# -------------------------------
# Precedence and associativity
# -------------------------------
def test_multiplication_binds_tighter_than_addition():
    assert parse_src("1 + 2 * 3") == [
        Binary(lit(1), T.PLUS, Binary(lit(2), T.STAR, lit(3)))
    ]


def test_binary_operators_are_left_associative():
    assert parse_src("1 - 2 - 3") == [
        Binary(Binary(lit(1), T.MINUS, lit(2)), T.MINUS, lit(3))
    ]


def test_and_binds_tighter_than_or():
    assert parse_src("a || b && c") == [
        Binary(sym("a"), T.OR_OR, Binary(sym("b"), T.AND_AND, sym("c")))
    ]


def test_equality_and_modulo_nest_under_logical_and():
    mod_eq = lambda n: Binary(Binary(sym("i"), T.MOD, lit(n)), T.EQUAL_EQUAL, lit(0))
    assert parse_src("i % 3 == 0 && i % 5 == 0") == [
        Binary(mod_eq(3), T.AND_AND, mod_eq(5))
    ]


def test_grouping_overrides_precedence():
    assert parse_src("(1 + 2) * 3") == [
        Binary(Group(Binary(lit(1), T.PLUS, lit(2))), T.STAR, lit(3))
    ]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("-x", Unary(T.MINUS, sym("x"))),
        ("!true", Unary(T.BANG, lit(True))),
        ("x * -1", Binary(sym("x"), T.STAR, Unary(T.MINUS, lit(1)))),
        ("- -1", Unary(T.MINUS, Unary(T.MINUS, lit(1)))),
    ],
)
def test_unary(source, expected):
    assert parse_src(source) == [expected]


@pytest.mark.parametrize(
    "source,op",
    [
        ("a < b", T.LESS),
        ("a <= b", T.LESS_EQUAL),
        ("a > b", T.GREATER),
        ("a >= b", T.GREATER_EQUAL),
        ("a != b", T.BANG_EQUAL),
        ("a // b", T.SLASH_SLASH),
    ],
)
def test_binary_operator_kinds(source, op):
    assert parse_src(source) == [Binary(sym("a"), op, sym("b"))]


# -------------------------------
# Statements
# -------------------------------
def test_declaration():
    assert parse_src("x := 1") == [Declaration(Symbol("x"), lit(1))]


def test_assignment():
    assert parse_src("x = x + 1") == [
        Assignment(Symbol("x"), Binary(sym("x"), T.PLUS, lit(1)))
    ]


def test_semicolons_separate_statements():
    assert parse_src("a; b;") == [sym("a"), sym("b")]


@pytest.mark.parametrize("source", ["1 := 2", "(x) := 1", "x : 1", "f! 1 := 2"])
def test_malformed_declarations(source):
    with pytest.raises(ZealSyntaxError):
        parse_src(source)


@pytest.mark.parametrize("source", ["1 = 2", "(x) = 1"])
def test_invalid_assignment_target(source):
    with pytest.raises(ZealSyntaxError):
        parse_src(source)


@pytest.mark.parametrize("source", ["1 )", "(1 + 2", "x := )", "else: 1", "fn 1 -> 2"])
def test_syntax_errors(source):
    with pytest.raises(ZealSyntaxError):
        parse_src(source)


def test_syntax_error_carries_location():
    with pytest.raises(ZealSyntaxError) as info:
        parse_src("x := 1\ny := (2")
    assert info.value.location.line == 2


# -------------------------------
# Calls
# -------------------------------
@pytest.mark.parametrize("source", ["f! 1 2", "f 1 2"])
def test_bang_and_juxtaposition_calls_agree(source):
    assert parse_src(source) == [FunctionCall(sym("f"), [lit(1), lit(2)])]


def test_zero_argument_call():
    assert parse_src("f!") == [FunctionCall(sym("f"), [])]


def test_arguments_are_primaries():
    assert parse_src("f! a (b + 1) \"s\"") == [
        FunctionCall(sym("f"), [sym("a"), Group(Binary(sym("b"), T.PLUS, lit(1))), lit("s")])
    ]


def test_call_binds_tighter_than_arithmetic():
    assert parse_src("f! n - 1") == [
        Binary(FunctionCall(sym("f"), [sym("n")]), T.MINUS, lit(1))
    ]


def test_field_access():
    assert parse_src("x.y") == [Get(sym("x"), "y")]


def test_method_call_sugar():
    assert parse_src("x.add! 1") == [FunctionCall(sym("add"), [sym("x"), lit(1)])]
    assert parse_src("x.add! 1") == parse_src("add! x 1")


def test_print_is_a_builtin_callee():
    assert parse_src('print! "hi"') == [FunctionCall(PRINT, [lit("hi")])]


# -------------------------------
# Pipelines
# -------------------------------
def test_pipe_into_bare_callee():
    assert parse_src("x |> f") == [FunctionCall(sym("f"), [sym("x")])]


def test_pipe_prepends_to_existing_arguments():
    assert parse_src("x |> f a") == parse_src("f x a")


def test_pipes_chain_left_to_right():
    assert parse_src("x |> f |> g 1") == [
        FunctionCall(sym("g"), [FunctionCall(sym("f"), [sym("x")]), lit(1)])
    ]


@pytest.mark.parametrize("source", ["is_even! 2 |> print", "is_even! 2 |> print!"])
def test_pipe_into_print(source):
    assert parse_src(source) == [
        FunctionCall(PRINT, [FunctionCall(sym("is_even"), [lit(2)])])
    ]


def test_pipe_binds_looser_than_logical_operators():
    assert parse_src("a || b |> f") == [
        FunctionCall(sym("f"), [Binary(sym("a"), T.OR_OR, sym("b"))])
    ]


# -------------------------------
# Continuation lines
# -------------------------------
def test_deeper_indented_operators_continue_the_statement():
    source = """
    a
        || b
        && c
    """
    assert parse_src(source) == [
        Binary(sym("a"), T.OR_OR, Binary(sym("b"), T.AND_AND, sym("c")))
    ]


def test_continued_pipeline():
    source = """
    x
        |> f
    """
    assert parse_src(source) == [FunctionCall(sym("f"), [sym("x")])]


def test_operator_at_statement_column_does_not_continue():
    with pytest.raises(ZealSyntaxError):
        parse_src("a\n|| b")


def test_arithmetic_never_continues():
    with pytest.raises(ZealSyntaxError):
        parse_src("a\n    + b")


# -------------------------------
# Control flow
# -------------------------------
def test_inline_if_else():
    assert parse_src("if c: 1 else: 2") == [If(sym("c"), lit(1), lit(2))]


def test_if_without_else():
    assert parse_src("if c: 1") == [If(sym("c"), lit(1))]


def test_else_on_next_line():
    assert parse_src("if c: 1\nelse: 2") == parse_src("if c: 1 else: 2")


def test_else_if_chain_nests():
    source = """
    if a: 1
    else if b: 2
    else: 3
    """
    assert parse_src(source) == [If(sym("a"), lit(1), If(sym("b"), lit(2), lit(3)))]


def test_block_branches():
    source = """
    if c:
        x = 1
    else:
        x = 2
    """
    assert parse_src(source) == [
        If(
            sym("c"),
            Block([Assignment(Symbol("x"), lit(1))]),
            Block([Assignment(Symbol("x"), lit(2))]),
        )
    ]


def test_while_block():
    source = """
    while x < 3:
        x = x + 1
        print! x
    """
    assert parse_src(source) == [
        While(
            Binary(sym("x"), T.LESS, lit(3)),
            Block([
                Assignment(Symbol("x"), Binary(sym("x"), T.PLUS, lit(1))),
                FunctionCall(PRINT, [sym("x")]),
            ]),
        )
    ]


def test_missing_colon_after_condition():
    with pytest.raises(ZealSyntaxError):
        parse_src("if c 1")
    with pytest.raises(ZealSyntaxError):
        parse_src("while c")


def test_statement_after_nested_blocks():
    source = """
    if a:
        if b:
            1
    2
    """
    assert parse_src(source) == [
        If(sym("a"), Block([If(sym("b"), Block([lit(1)]))])),
        lit(2),
    ]


# -------------------------------
# Lambdas
# -------------------------------
def test_inline_lambda():
    assert parse_src("fn x y -> x + y") == [
        LambdaExpr([Symbol("x"), Symbol("y")], [Binary(sym("x"), T.PLUS, sym("y"))])
    ]


def test_zero_parameter_lambda():
    assert parse_src("fn -> 1") == [LambdaExpr([], [lit(1)])]


def test_lambda_block_body_keeps_statements():
    source = """
    f := fn x ->
        y := x
        y
    """
    assert parse_src(source) == [
        Declaration(
            Symbol("f"),
            LambdaExpr([Symbol("x")], [Declaration(Symbol("y"), sym("x")), sym("y")]),
        )
    ]


def test_lambda_as_last_argument():
    assert parse_src("apply! fn x -> x") == [
        FunctionCall(sym("apply"), [LambdaExpr([Symbol("x")], [sym("x")])])
    ]


# -------------------------------
# Parser API
# -------------------------------
def test_parse_statement_returns_none_at_end():
    parser = Parser(scan("a\nb"))
    assert parser.parse_statement() == sym("a")
    assert parser.parse_statement() == sym("b")
    assert parser.parse_statement() is None


def test_missing_eof_is_tolerated():
    tokens = [t for t in scan("1 + 2") if t.type is not T.EOF]
    assert parse(tokens) == [Binary(lit(1), T.PLUS, lit(2))]


def test_nodes_record_their_location():
    [decl] = parse(scan("\n  x := 1"))
    assert decl.location.line == 2
    assert decl.location.col == 2


# -------------------------------
# Hypothesis tests
# -------------------------------
word_strat = st.sampled_from(
    ["x", "1", "f!", ":=", "=", "+", "||", "|>", "(", ")", "if", "else", ":", "fn", "->", ";", "\n", "\n    "]
)


@given(st.lists(word_strat, max_size=12))
def test_parser_fails_only_with_zeal_errors(words):
    try:
        statements = parse(scan(" ".join(words)))
    except ZealError:
        return
    assert isinstance(statements, list)


# -------------------------------
# Statements after a closed block
# -------------------------------
def test_block_bodied_lambda_ends_its_statement():
    source = """
    a := fn ->
        print! 1
    b := 2
    """
    assert parse_src(source) == [
        Declaration(Symbol("a"), LambdaExpr([], [FunctionCall(PRINT, [lit(1)])])),
        Declaration(Symbol("b"), lit(2)),
    ]


def test_line_after_lambda_block_is_not_an_argument_or_operand():
    source = """
    a := fn x ->
        x + 1
    a! 1 |> print
    """
    assert parse_src(source) == [
        Declaration(Symbol("a"), LambdaExpr([Symbol("x")], [Binary(sym("x"), T.PLUS, lit(1))])),
        FunctionCall(PRINT, [FunctionCall(sym("a"), [lit(1)])]),
    ]


def test_lambda_block_as_last_argument_ends_the_call():
    source = """
    apply! fn x ->
        x
    (y)
    """
    assert parse_src(source) == [
        FunctionCall(sym("apply"), [LambdaExpr([Symbol("x")], [sym("x")])]),
        Group(sym("y")),
    ]


def test_else_still_follows_a_block_branch():
    source = """
    f := fn n ->
        if n > 0:
            1
        else:
            2
    f! 3
    """
    [decl, call] = parse_src(source)
    assert decl.initializer.body == [
        If(Binary(sym("n"), T.GREATER, lit(0)), Block([lit(1)]), Block([lit(2)]))
    ]
    assert call == FunctionCall(sym("f"), [lit(3)])


# -------------------------------
# Nesting depth
# -------------------------------
def test_deep_nesting_within_the_recursion_limit_parses():
    [expr] = parse(scan("(" * 100 + "1" + ")" * 100))
    for _ in range(100):
        expr = expr.expr
    assert expr == lit(1)


@pytest.mark.parametrize("source", ["(" * 3000 + "1" + ")" * 3000, "- " * 20000 + "1"])
def test_excessive_nesting_is_a_syntax_error(monkeypatch, source):
    monkeypatch.setenv("ZEAL_RECURSION_LIMIT", "2000")
    with pytest.raises(ZealSyntaxError, match="nested too deeply"):
        parse(scan(source))
