"""
pylox Environment
Chained lexical scopes for evaluation

An Environment maps names to values and optionally points at the enclosing
environment. Environments form a tree rooted at the global scope; closures
keep a reference to the environment they were defined in, so a scope lives as
long as anything still refers to it.
"""

from __future__ import annotations
from typing import Dict, Optional

from pylox.errors import LoxRuntimeError
from pylox.types import Token, Value


#==============================================================================
# Value Environment
#==============================================================================

class Environment:
    """
    Mutable lexical scope.

    ``define`` only touches this scope; ``get`` and ``assign`` walk outward
    through ``enclosing`` and act on the first scope holding the name.
    """

    def __init__(self, enclosing: Optional["Environment"] = None):
        """
        Create a new scope.

        Args:
            enclosing: Lexical parent scope (None for the global scope)
        """
        self._enclosing = enclosing
        self._values: Dict[str, Value] = {}

    @property
    def enclosing(self) -> Optional["Environment"]:
        """The lexical parent, fixed at construction"""
        return self._enclosing

    #---------------------------------------------------------------------------
    # Name-based access
    #---------------------------------------------------------------------------

    def define(self, name: str, value: Value) -> None:
        """
        Bind a name in this scope, overwriting any previous binding here.

        Args:
            name: Variable name
            value: Value to bind
        """
        self._values[name] = value

    def get(self, name: Token) -> Value:
        """
        Look up a name, walking outward through enclosing scopes.

        Args:
            name: Token naming the variable

        Returns:
            The value bound in the nearest scope defining the name

        Raises:
            LoxRuntimeError: UndefinedVariable if no scope defines it
        """
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env._values:
                return env._values[name.lexeme]
            env = env._enclosing
        raise LoxRuntimeError.undefined_variable(name)

    def assign(self, name: Token, value: Value) -> None:
        """
        Rebind an existing name in the nearest scope that defines it.

        Args:
            name: Token naming the variable
            value: New value

        Raises:
            LoxRuntimeError: UndefinedVariable if no scope defines it
        """
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env._values:
                env._values[name.lexeme] = value
                return
            env = env._enclosing
        raise LoxRuntimeError.undefined_variable(name)

    #---------------------------------------------------------------------------
    # Distance-based access (for precomputed lexical distances)
    #---------------------------------------------------------------------------

    def ancestor(self, distance: int) -> "Environment":
        """
        Return the scope ``distance`` hops up the enclosing chain.

        Raises:
            ValueError: If the chain is shorter than ``distance``
        """
        env = self
        for _ in range(distance):
            if env._enclosing is None:
                raise ValueError(f"No enclosing environment at distance {distance}")
            env = env._enclosing
        return env

    def get_at(self, distance: int, name: str) -> Value:
        """Read a name from the scope exactly ``distance`` hops up"""
        return self.ancestor(distance)._values[name]

    def assign_at(self, distance: int, name: str, value: Value) -> None:
        """Write a name in the scope exactly ``distance`` hops up"""
        self.ancestor(distance)._values[name] = value

    def __contains__(self, name: str) -> bool:
        """Check if a name is bound in this scope (not its ancestors)."""
        return name in self._values

    def __len__(self) -> int:
        """Return the number of bindings in this scope."""
        return len(self._values)

    def __repr__(self) -> str:
        depth = 0
        env = self._enclosing
        while env is not None:
            depth += 1
            env = env._enclosing
        return f"Environment(depth={depth}, names={sorted(self._values)})"
