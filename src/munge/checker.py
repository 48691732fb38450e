"""Static checker: walk the AST in declaration order, reject programs that would fail to run."""

from munge.ast_nodes import (
    Assignment,
    FunctionDef,
    FunctionInvocation,
    Program,
    Statement,
)
from munge.errors import (
    ArityError,
    DuplicateFunctionError,
    ExecutionError,
    RecursiveInvocationError,
    UndefinedFunctionError,
    UndefinedNameError,
)


def check(program: Program) -> None:
    """Check the program without a document. Raises the executor's errors on failure.

    Function bodies are resolved when a top-level invocation first reaches
    them, against the functions defined up to that point, as the executor does.
    """
    functions: dict[str, FunctionDef] = {}
    resolved: set[str] = set()
    running: set[str] = set()

    def where(stmt: Statement) -> dict:
        loc = getattr(stmt, "loc", None)
        if loc is None:
            return {"path": program.path}
        return {"line": loc.line, "column": loc.column, "path": loc.path or program.path}

    def check_invocation(stmt: FunctionInvocation) -> None:
        fn = functions.get(stmt.function)
        if fn is None:
            raise UndefinedFunctionError(
                f"Function {stmt.function!r} is undefined. Define it before invoking it.",
                function=stmt.function, **where(stmt),
            )
        declared = len(fn.returns.names)
        if len(stmt.identifiers) > declared:
            raise ArityError(
                f"Function {stmt.function!r} returns {declared} values, "
                f"you expected {len(stmt.identifiers)}",
                function=stmt.function, **where(stmt),
            )
        resolve(fn)

    def resolve(fn: FunctionDef) -> None:
        if fn.name in resolved:
            return
        if fn.name in running:
            raise RecursiveInvocationError(
                f"Function {fn.name!r} invokes itself",
                function=fn.name, **where(fn),
            )
        running.add(fn.name)
        for s in fn.body:
            if isinstance(s, FunctionInvocation):
                check_invocation(s)
        running.discard(fn.name)
        resolved.add(fn.name)

    def check_function(stmt: FunctionDef) -> None:
        if stmt.name in functions:
            raise DuplicateFunctionError(
                f"Function {stmt.name!r} has already been defined",
                function=stmt.name, **where(stmt),
            )
        assigned: set[str] = set()
        for s in stmt.body:
            if isinstance(s, Assignment):
                assigned.add(s.identifier)
            elif isinstance(s, FunctionInvocation):
                assigned.update(s.identifiers)
        for name in stmt.returns.names:
            if name not in assigned:
                raise UndefinedNameError(
                    f"Function {stmt.name!r} returns {name!r}, which its body never assigns",
                    function=stmt.name, **where(stmt.returns),
                )
        functions[stmt.name] = stmt

    for stmt in program.statements:
        if isinstance(stmt, FunctionDef):
            check_function(stmt)
        elif isinstance(stmt, FunctionInvocation):
            check_invocation(stmt)
        elif isinstance(stmt, Assignment):
            continue
        else:
            raise ExecutionError(f"Cannot execute {type(stmt).__name__} here", **where(stmt))
