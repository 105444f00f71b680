"""
Adder Abstract Syntax Tree (AST) Definitions
============================================

This module defines the AST node types produced by the Adder parser
and consumed by the code generator and the reference interpreter.

Node Hierarchy
--------------
Expr (base)
├── Num - integer literal (leaf)
└── UnaryExpr - operator applied to one operand
    ├── Add1 - operand plus one
    ├── Sub1 - operand minus one
    └── Negate - arithmetic negation of the operand

Design Notes
------------
- All nodes are frozen dataclasses: the AST is immutable after construction
- Each operator node owns exactly one child; the tree is never shared
- Traversals use iter_postorder(), which keeps its own work stack so
  arbitrarily deep programs do not exhaust the Python call stack
"""

from dataclasses import dataclass
from typing import Any, Iterator


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class Expr:
    """
    Base class for all AST nodes.

    Every node in the AST evaluates to a single integer value.
    """

    def children(self) -> tuple["Expr", ...]:
        """Return the child nodes of this node, in source order."""
        return ()


@dataclass(frozen=True)
class UnaryExpr(Expr):
    """
    Base class for operator nodes with a single operand.

    Attributes:
        operand: The sub-expression the operator acts on
        operator: Source-level operator name (class attribute)
    """
    operand: Expr

    operator = ""

    def children(self) -> tuple[Expr, ...]:
        return (self.operand,)


# =============================================================================
# Concrete Nodes
# =============================================================================

@dataclass(frozen=True)
class Num(Expr):
    """
    Integer literal.

    Attributes:
        value: The literal value (fits a signed 32-bit word)
    """
    value: int


@dataclass(frozen=True)
class Add1(UnaryExpr):
    """(add1 e): the value of e plus one."""
    operator = "add1"


@dataclass(frozen=True)
class Sub1(UnaryExpr):
    """(sub1 e): the value of e minus one."""
    operator = "sub1"


@dataclass(frozen=True)
class Negate(UnaryExpr):
    """(negate e): the arithmetic negation of e."""
    operator = "negate"


# Operator name -> node class, in the order operators are documented
UNARY_OPERATORS: dict[str, type[UnaryExpr]] = {
    cls.operator: cls for cls in (Add1, Sub1, Negate)
}


# =============================================================================
# Traversal
# =============================================================================

def iter_postorder(root: Expr) -> Iterator[Expr]:
    """
    Yield every node of the tree, children before their parent.

    The walk keeps an explicit stack instead of recursing, so its depth
    is limited only by available memory.

    Example:
        >>> [type(n).__name__ for n in iter_postorder(Negate(Add1(Num(5))))]
        ['Num', 'Add1', 'Negate']
    """
    stack: list[tuple[Expr, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        children = node.children()
        if expanded or not children:
            yield node
            continue
        stack.append((node, True))
        for child in reversed(children):
            stack.append((child, False))


def depth(root: Expr) -> int:
    """Return the number of nodes on the longest root-to-leaf path."""
    deepest = 0
    stack = [(root, 1)]
    while stack:
        node, level = stack.pop()
        deepest = max(deepest, level)
        for child in node.children():
            stack.append((child, level + 1))
    return deepest


# =============================================================================
# Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override one visit_* method per node kind. A node kind
    without a handler reaches generic_visit(), which raises, so a new
    node kind cannot be silently skipped by an existing visitor.

    visit() handles a single node; it does not descend into children.
    Walks over a whole tree drive visit() from iter_postorder().

    Usage:
        class MyVisitor(ASTVisitor):
            def visit_Num(self, node):
                ...

        visitor = MyVisitor()
        for node in iter_postorder(tree):
            visitor.visit(node)
    """

    def visit(self, node: Expr) -> Any:
        """
        Visit a node by dispatching to the appropriate method.

        Args:
            node: The AST node to visit

        Returns:
            The result of the visit method (varies by visitor)
        """
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Expr) -> Any:
        """Called for node kinds the visitor has no handler for."""
        raise NotImplementedError(
            f"{self.__class__.__name__} cannot handle {node.__class__.__name__}"
        )


class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Produces one line per node, indented by nesting level.

    Usage:
        printer = ASTPrinter()
        print(printer.print(ast))

    Output for (negate (add1 5)):
        Negate
          Add1
            Num 5
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: Expr) -> str:
        """Print the AST and return as string."""
        self.output = []
        # Pre-order with explicit stack: (node, indent level)
        stack = [(node, 0)]
        while stack:
            current, level = stack.pop()
            self.indent_level = level
            self.visit(current)
            for child in reversed(current.children()):
                stack.append((child, level + 1))
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        """Emit a line with current indentation."""
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def visit_Num(self, node: Num) -> None:
        self._emit(f"Num {node.value}")

    def visit_Add1(self, node: Add1) -> None:
        self._emit("Add1")

    def visit_Sub1(self, node: Sub1) -> None:
        self._emit("Sub1")

    def visit_Negate(self, node: Negate) -> None:
        self._emit("Negate")
