"""Visitor pattern implementation for AST traversal."""

from rbsast.visitor.counter import NodeCounter
from rbsast.visitor.visitor import ASTVisitor, BaseVisitor

__all__ = ["ASTVisitor", "BaseVisitor", "NodeCounter"]
