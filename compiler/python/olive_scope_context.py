"""
Scope Context

A chain of lexical scopes used during semantic analysis. Each block-structured
construct gets a fresh child; lookups walk outward through parent links.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from olive_builtins import BUILTIN_FUNCTIONS
from olive_diagnostics import ContextViolationError, RedeclarationError, UnresolvedIdentifierError
from olive_symbols import Entity, make_function


@dataclass
class ScopeContext:
    """One lexical scope: declared names, parent link, and the in-function flag."""
    declarations: Dict[str, Entity] = field(default_factory=dict)
    parent: Optional[ScopeContext] = None
    in_function: bool = False

    @staticmethod
    def initial() -> ScopeContext:
        """Create a fresh root scope seeded with the builtin functions."""
        root = ScopeContext()
        for builtin in BUILTIN_FUNCTIONS:
            root.declare(builtin.name, make_function(builtin.name, builtin.param_types, builtin.result, is_builtin=True))
        return root

    def child_for_block(self) -> ScopeContext:
        return ScopeContext(parent=self, in_function=self.in_function)

    def child_for_function(self) -> ScopeContext:
        return ScopeContext(parent=self, in_function=True)

    def declare(self, name: str, entity: Entity, node: Optional[object] = None) -> None:
        """Record `entity` under `name` in this scope (shadowing outer scopes)."""
        existing = self.declarations.get(name)
        if existing is not None and not existing.is_mutable:
            raise RedeclarationError(f"[RES-0021] '{name}' is already declared as immutable in this scope", node=node)
        self.declarations[name] = entity

    def resolve(self, name: str) -> Optional[Entity]:
        scope: Optional[ScopeContext] = self
        while scope is not None:
            entity = scope.declarations.get(name)
            if entity is not None:
                return entity
            scope = scope.parent
        return None

    def lookup(self, name: str, node: Optional[object] = None) -> Entity:
        entity = self.resolve(name)
        if entity is None:
            raise UnresolvedIdentifierError(f"[RES-0010] identifier '{name}' has not been declared", node=node)
        return entity

    def variable_must_not_be_already_declared(self, name: str, node: Optional[object] = None) -> None:
        if name in self.declarations:
            raise RedeclarationError(f"[RES-0020] variable '{name}' already declared in this scope", node=node)

    def assert_in_function(self, message: str, node: Optional[object] = None) -> None:
        scope: Optional[ScopeContext] = self
        while scope is not None:
            if scope.in_function:
                return
            scope = scope.parent
        raise ContextViolationError(message, node=node)
