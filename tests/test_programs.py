"""End-to-end programs run through the public `run` entry point."""
import textwrap

import pytest

from zeal.errors import ZealLexError, ZealOverflowError, ZealSyntaxError
from zeal.interpreter import run
from zeal.types.unit import Unit


def program(source):
    return textwrap.dedent(source).lstrip("\n")


def printed(output):
    return output.getvalue().splitlines()


def test_declare_and_print(output):
    assert run("i := 1; print i;", output) == [Unit, 1]
    assert printed(output) == ["1"]


def test_fizzbuzz(output):
    source = program(
        """
        i := 1
        while i <= 15:
            if i % 3 == 0 && i % 5 == 0:
                print! "fizzbuzz"
            else if i % 5 == 0:
                print! "buzz"
            else if i % 3 == 0:
                print! "fizz"
            else:
                print! i
            i = i + 1
        """
    )
    run(source, output)
    assert printed(output) == [
        "1", "2", "fizz", "4", "buzz", "fizz", "7", "8",
        "fizz", "buzz", "11", "fizz", "13", "14", "fizzbuzz",
    ]


@pytest.mark.parametrize("print_form", ["print", "print!"])
def test_pipeline_into_print(output, print_form):
    source = program(
        f"""
        is_even := fn x -> x % 2 == 0
        is_even! 2 |> {print_form}
        is_even! 1 |> {print_form}
        """
    )
    run(source, output)
    assert printed(output) == ["true", "false"]


def test_nested_scopes(output):
    source = program(
        """
        a := 0
        if true:
            print! a
            a = a + 1
            print! a
            a := 10
            print! a
            if true:
                print! a
                a = a + 1
                print! a
                a := 100
                print! a
            print! a
        print! a
        """
    )
    run(source, output)
    assert printed(output) == ["0", "1", "10", "10", "11", "100", "11", "1"]


def test_closures_share_the_captured_variable(output):
    source = program(
        """
        x := 0
        a := fn ->
            print! x
            x = 1
            print! x
        b := fn ->
            print! x
            x = 10
            print! x
        print! x
        x = 100
        print! x
        a!
        a!
        print! x
        b!
        print! x
        """
    )
    run(source, output)
    assert printed(output) == ["0", "100", "100", "1", "1", "1", "1", "1", "10", "10"]


def test_continued_logical_and_pipeline_lines(output):
    source = program(
        """
        add := fn a b -> a + b
        false
            || true
            && true
            |> print!
        add! 1 1 |> print
        """
    )
    run(source, output)
    assert printed(output) == ["true", "2"]


def test_counter_loop_with_function(output):
    source = program(
        """
        square := fn n -> n * n
        i := 1
        total := 0
        while i <= 4:
            total = total + (square! i)
            i = i + 1
        print! "total" total
        """
    )
    run(source, output)
    assert printed(output) == ["total 30"]


def test_comments_are_ignored(output):
    source = program(
        """
        # leading comment
        x := 2 # trailing comment
        print! x
        """
    )
    run(source, output)
    assert printed(output) == ["2"]


@pytest.mark.parametrize(
    "source",
    [
        "2147483647 + 1",
        "-2147483647 - 1 - 1",
        "(-2147483647 - 1) * -1",
        "(-2147483647 - 1) // -1",
        "-(-2147483647 - 1)",
        "2147483647 * 2",
    ],
)
def test_integer_overflow_is_an_error(source):
    with pytest.raises(ZealOverflowError):
        run(source)


def test_extreme_values_are_representable():
    assert run("2147483647; -2147483647 - 1") == [2147483647, -2147483648]


def test_oversized_literal_is_rejected():
    with pytest.raises(ZealLexError):
        run("2147483648")


def test_call_binds_tighter_than_addition(output):
    assert run("print! 1 + 2", output) == [3]
    assert printed(output) == ["1"]


def test_lambda_with_if_else_body_followed_by_calls(output):
    source = program(
        """
        classify := fn n ->
            if n > 0: "positive"
            else: "other"
        classify! 1 |> print
        classify! 0 |> print
        """
    )
    run(source, output)
    assert printed(output) == ["positive", "other"]


def test_statement_after_lambda_block_runs(output):
    source = program(
        """
        a := fn ->
            print! "in a"
        b := 2
        a!
        print! b
        """
    )
    run(source, output)
    assert printed(output) == ["in a", "2"]


def test_long_unary_chain_evaluates():
    assert run(" ".join(["-"] * 300) + " 1") == [1]


def test_deeply_nested_source_is_rejected(monkeypatch):
    monkeypatch.setenv("ZEAL_RECURSION_LIMIT", "2000")
    with pytest.raises(ZealSyntaxError):
        run("(" * 3000 + "1" + ")" * 3000)
