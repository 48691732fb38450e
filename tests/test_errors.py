"""Tests for munge error rendering."""

import pytest
from munge.errors import ExecutionError, MungeError, UndefinedFunctionError
from munge.executor import run
from munge.parser import parse


@pytest.mark.parametrize("kwargs,expected", [
    ({}, "boom"),
    ({"line": 3}, "3: boom"),
    ({"line": 3, "column": 2}, "3:2: boom"),
    ({"line": 3, "column": 2, "path": "a.munge"}, "a.munge:3:2: boom"),
    ({"path": "a.munge"}, "a.munge: boom"),
])
def test_error_location_rendering(kwargs, expected):
    assert str(MungeError("boom", **kwargs)) == expected


def test_execution_error_points_at_statement(page):
    program = parse("a = div\nb = do g\n", path="demo.munge")
    with pytest.raises(UndefinedFunctionError) as exc_info:
        run(program, page)
    assert isinstance(exc_info.value, ExecutionError)
    assert str(exc_info.value).startswith("demo.munge:2:0: Function 'g'")
