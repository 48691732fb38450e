"""Tests for munge static checker."""

import pytest
from munge.ast_nodes import Program, ReturnSpec
from munge.checker import check
from munge.errors import (
    ArityError,
    DuplicateFunctionError,
    ExecutionError,
    RecursiveInvocationError,
    UndefinedFunctionError,
    UndefinedNameError,
)
from munge.executor import run
from munge.parser import parse

FN = """
def f
  x = #viewport
  y = canvas
  return {x, y}
"""


def test_check_valid_program():
    check(parse(FN + "a, b = do f\nc = do f\nd = div {text} (0,)\n"))


def test_check_examples(example_file):
    check(parse(example_file.read_text(), path=str(example_file)))


def test_check_duplicate_function():
    with pytest.raises(DuplicateFunctionError) as exc_info:
        check(parse(FN + FN))
    assert exc_info.value.function == "f"


def test_check_undefined_function():
    with pytest.raises(UndefinedFunctionError) as exc_info:
        check(parse("a = do g"))
    assert "undefined" in str(exc_info.value).lower()


def test_check_undefined_function_inside_body():
    with pytest.raises(UndefinedFunctionError) as exc_info:
        check(parse("def f\n  k = do g\n  return {k}\na = do f\n"))
    assert exc_info.value.function == "g"
    assert exc_info.value.line == 2


def test_check_uninvoked_body_is_not_resolved():
    check(parse("def f\n  k = do g\n  return {k}\n"))


def test_check_resolves_functions_when_invoked(counting_document):
    source = """
def outer
  v = #viewport
  k = do inner
  return {v, k}
def inner
  c = canvas
  return {c}
a, b = do outer
"""
    program = parse(source)
    check(program)
    result = run(program, counting_document("<div id=viewport><canvas></canvas></div>"))
    assert result["b"].tag.name == "canvas"


def test_check_body_invocation_before_definition_fails():
    source = "def outer\n  k = do inner\n  return {k}\na = do outer\ndef inner\n  c = canvas\n  return {c}\n"
    with pytest.raises(UndefinedFunctionError) as exc_info:
        check(parse(source))
    assert exc_info.value.function == "inner"


def test_check_body_arity():
    source = FN + "def g\n  a, b, c = do f\n  return {a}\nz = do g\n"
    with pytest.raises(ArityError) as exc_info:
        check(parse(source))
    assert exc_info.value.function == "f"


@pytest.mark.parametrize("source", [
    "def f\n  x = do f\n  return {x}\na = do f\n",
    "def f\n  x = do g\n  return {x}\ndef g\n  y = do f\n  return {y}\na = do g\n",
])
def test_check_recursive_invocation(source, page):
    with pytest.raises(RecursiveInvocationError):
        check(parse(source))
    with pytest.raises(RecursiveInvocationError):
        run(parse(source), page)


def test_check_arity():
    with pytest.raises(ArityError):
        check(parse(FN + "a, b, c = do f\n"))


def test_check_unassigned_return_name():
    with pytest.raises(UndefinedNameError) as exc_info:
        check(parse("def f\n  x = #a\n  return {x, y}\n"))
    assert "'y'" in str(exc_info.value)
    assert exc_info.value.line == 3


def test_check_nested_invocation_assigns_names():
    check(parse(FN + "def g\n  a, b = do f\n  return {b}\nz = do g\n"))


def test_check_top_level_return_is_rejected():
    program = Program(statements=(ReturnSpec(names=("x",)),))
    with pytest.raises(ExecutionError) as exc_info:
        check(program)
    assert "ReturnSpec" in str(exc_info.value)
