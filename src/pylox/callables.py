"""
pylox Callables
Anything a call expression can invoke

Provides the LoxCallable contract together with user-defined functions,
bound methods and host-implemented native functions. Classes are callables
too and live in pylox.classes.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, TYPE_CHECKING

from pylox.env import Environment
from pylox.types import FunctionStmt, Token, TokenType, Value, nil_val

if TYPE_CHECKING:
    from pylox.classes import LoxInstance
    from pylox.evaluator import Evaluator

logger = logging.getLogger(__name__)

# Synthetic token used to read back the receiver of a bound initializer
THIS_TOKEN = Token(TokenType.THIS, "this")


#==============================================================================
# Callable Contract
#==============================================================================

class LoxCallable(ABC):
    """Base class for every invocable runtime value"""

    kind = "callable"

    @abstractmethod
    def arity(self) -> int:
        """Number of arguments a call must supply"""

    @abstractmethod
    def call(self, evaluator: "Evaluator", arguments: List[Value]) -> Value:
        """
        Invoke with already evaluated arguments.

        The caller has checked ``len(arguments) == self.arity()``.
        """


#==============================================================================
# User-defined Functions
#==============================================================================

class LoxFunction(LoxCallable):
    """
    A function declaration closed over its defining environment.

    Each call runs the body in a fresh environment whose parent is the
    closure, never the caller's environment.
    """

    def __init__(self, declaration: FunctionStmt, closure: Environment, is_initializer: bool = False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def arity(self) -> int:
        return len(self.declaration.params)

    def bind(self, instance: "LoxInstance") -> "BoundMethod":
        """
        Bind this method to a receiver.

        Args:
            instance: The receiver ``this`` will refer to

        Returns:
            A new BoundMethod whose closure defines ``this``
        """
        environment = Environment(self.closure)
        environment.define("this", instance)
        return BoundMethod(self.declaration, environment, instance, self.is_initializer)

    def call(self, evaluator: "Evaluator", arguments: List[Value]) -> Value:
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        signal = evaluator.execute_block(self.declaration.body, environment)

        if self.is_initializer:
            return self.closure.get(THIS_TOKEN)
        if signal is not None:
            return signal.value
        return nil_val()

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    def __repr__(self) -> str:
        return f"LoxFunction({self.name}/{self.arity()})"


class BoundMethod(LoxFunction):
    """A method paired with the instance it was retrieved from"""

    def __init__(
        self,
        declaration: FunctionStmt,
        closure: Environment,
        receiver: "LoxInstance",
        is_initializer: bool = False,
    ):
        super().__init__(declaration, closure, is_initializer)
        self.receiver = receiver

    def __repr__(self) -> str:
        return f"BoundMethod({self.name}/{self.arity()} of {self.receiver})"


#==============================================================================
# Native Functions
#==============================================================================

class NativeFunction(LoxCallable):
    """
    A callable implemented in Python.

    Attributes:
        name: Global name the function is defined under
        params: Parameter count
        impl: Implementation taking the evaluated argument values
    """

    def __init__(self, name: str, params: int, impl: Callable[..., Value]):
        self.name = name
        self.params = params
        self.impl = impl

    def arity(self) -> int:
        return self.params

    def call(self, evaluator: "Evaluator", arguments: List[Value]) -> Value:
        logger.debug(f"[native] {self.name}({len(arguments)} args)")
        return self.impl(*arguments)

    def __str__(self) -> str:
        return "<native fn>"

    def __repr__(self) -> str:
        return f"NativeFunction({self.name}/{self.params})"
