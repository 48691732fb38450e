"""Tree-walking executor: run a parsed Program against one HTML document."""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from munge.ast_nodes import (
    Assignment,
    FunctionDef,
    FunctionInvocation,
    Program,
    RangeMode,
    Selection,
    Statement,
)
from munge.document import Document, Node
from munge.errors import (
    ArityError,
    DuplicateFunctionError,
    ExecutionError,
    RecursiveInvocationError,
    UndefinedFunctionError,
)
from munge.log import get_logger

logger = get_logger(__name__)

# Node, list of nodes, string, list of strings, or None for an absent match.
Value = Any


def _attribute(node: Node, name: str) -> Optional[str]:
    if name == "text":
        return node.text()
    if name == "html":
        return node.inner_html()
    if name == "outer":
        return node.outer_html()
    return node.attribute(name)


def project(node: Node, attributes: Optional[Sequence[str]]) -> Value:
    """Map a matched node to the requested attribute(s).

    No attribute list or an empty one keeps the node. One name yields that
    attribute's value, several yield a list in request order. ``text``,
    ``html`` and ``outer`` are always available; a missing attribute is None.
    """
    if not attributes:
        return node
    if len(attributes) == 1:
        return _attribute(node, attributes[0])
    return [_attribute(node, name) for name in attributes]


@dataclass
class FunctionEntry:
    definition: FunctionDef
    results: Optional[list[tuple[str, Value]]] = None
    running: bool = False


@dataclass
class Frame:
    """Private environment of one scope: the top level or one function body."""
    env: dict[str, Value] = field(default_factory=dict)


class Executor:
    """Runs programs against ``document``. Function state is reset on every ``execute``."""

    def __init__(self, document: Document):
        self.document = document
        self.functions: dict[str, FunctionEntry] = {}

    def execute(self, program: Program) -> dict[str, Value]:
        self.functions = {}
        frame = Frame()
        logger.debug("run.start", path=program.path, statements=len(program.statements))
        for stmt in program.statements:
            self.execute_statement(stmt, frame)
        logger.debug("run.done", path=program.path, results=len(frame.env), functions=len(self.functions))
        return frame.env

    def execute_statement(self, stmt: Statement, frame: Frame) -> None:
        if isinstance(stmt, Assignment):
            frame.env[stmt.identifier] = self.select(stmt.selection)
            return
        if isinstance(stmt, FunctionInvocation):
            self.invoke(stmt, frame)
            return
        if isinstance(stmt, FunctionDef):
            self.define(stmt)
            return
        raise ExecutionError(f"Cannot execute {type(stmt).__name__} here", *_loc(stmt))

    # --- Selections ---

    def select(self, selection: Selection) -> Value:
        selector = selection.selector
        attributes = selection.attributes
        rng = selection.range
        mode = rng.mode

        if mode is RangeMode.WHOLE:
            node = self.document.query(selector)
            return project(node, attributes) if node is not None else None

        nodes = self.document.query_all(selector)
        if mode is RangeMode.INDEX:
            if rng.start < len(nodes):
                return project(nodes[rng.start], attributes)
            return None
        if mode is RangeMode.OPEN_SLICE:
            picked = nodes[rng.start:]
        else:
            picked = nodes[rng.start:rng.end]
        if attributes is None:
            return list(picked)
        return [project(node, attributes) for node in picked]

    # --- Functions ---

    def define(self, stmt: FunctionDef) -> None:
        if stmt.name in self.functions:
            raise DuplicateFunctionError(
                f"Function {stmt.name!r} has already been defined",
                *_loc(stmt), function=stmt.name,
            )
        self.functions[stmt.name] = FunctionEntry(definition=stmt)
        logger.debug("function.defined", function=stmt.name, returns=list(stmt.returns.names))

    def evaluate(self, entry: FunctionEntry) -> list[tuple[str, Value]]:
        """Run a function body once in a fresh frame; later calls reuse the result."""
        fn = entry.definition
        if entry.results is not None:
            logger.debug("function.cached", function=fn.name)
            return entry.results
        if entry.running:
            raise RecursiveInvocationError(
                f"Function {fn.name!r} invokes itself",
                *_loc(fn), function=fn.name,
            )

        entry.running = True
        try:
            frame = Frame()
            for stmt in fn.body:
                self.execute_statement(stmt, frame)
        finally:
            entry.running = False

        results = []
        for name in fn.returns.names:
            if name not in frame.env:
                logger.warning("function.unassigned_return", function=fn.name, name=name)
            results.append((name, frame.env.get(name)))
        entry.results = results
        logger.debug("function.evaluated", function=fn.name, returns=len(results))
        return results

    def invoke(self, stmt: FunctionInvocation, frame: Frame) -> None:
        entry = self.functions.get(stmt.function)
        if entry is None:
            raise UndefinedFunctionError(
                f"Function {stmt.function!r} is undefined",
                *_loc(stmt), function=stmt.function,
            )
        returned = len(entry.definition.returns.names)
        if len(stmt.identifiers) > returned:
            raise ArityError(
                f"Function {stmt.function!r} does not return enough values to unpack. "
                f"Function returns {returned}, you expected {len(stmt.identifiers)}",
                *_loc(stmt), function=stmt.function,
            )
        # Fewer targets than returns keeps a prefix of the return order.
        results = self.evaluate(entry)
        for identifier, (_, value) in zip(stmt.identifiers, results):
            frame.env[identifier] = value


def _loc(stmt: Statement) -> tuple[Optional[int], Optional[int], Optional[str]]:
    loc = getattr(stmt, "loc", None)
    if loc is None:
        return (None, None, None)
    return (loc.line, loc.column, loc.path)


def run(program: Program, document: Document) -> dict[str, Value]:
    """Execute ``program`` against ``document`` with fresh function state."""
    return Executor(document).execute(program)
