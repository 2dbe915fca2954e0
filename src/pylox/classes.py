"""
pylox Classes and Instances
Class objects with method tables and single inheritance

A LoxClass is itself callable: calling it builds a LoxInstance and runs the
``init`` method found through the inheritance chain, if there is one.
"""

from __future__ import annotations

from typing import Dict, List, Optional, TYPE_CHECKING

from pylox.callables import LoxCallable, LoxFunction
from pylox.errors import LoxRuntimeError
from pylox.types import Token, Value

if TYPE_CHECKING:
    from pylox.evaluator import Evaluator


INITIALIZER = "init"


#==============================================================================
# Class
#==============================================================================

class LoxClass(LoxCallable):
    """
    Runtime class object.

    Attributes:
        name: Class name
        superclass: Parent class, or None
        methods: Method table mapping names to unbound functions
    """

    def __init__(self, name: str, superclass: Optional["LoxClass"], methods: Dict[str, LoxFunction]):
        self.name = name
        self.superclass = superclass
        self.methods = methods

    def find_method(self, name: str) -> Optional[LoxFunction]:
        """
        Look a method up on this class, then on each ancestor in turn.

        Args:
            name: Method name

        Returns:
            The nearest definition, or None
        """
        klass: Optional[LoxClass] = self
        while klass is not None:
            method = klass.methods.get(name)
            if method is not None:
                return method
            klass = klass.superclass
        return None

    def ancestors(self) -> List["LoxClass"]:
        """Superclass chain, nearest first"""
        chain: List[LoxClass] = []
        klass = self.superclass
        while klass is not None:
            chain.append(klass)
            klass = klass.superclass
        return chain

    def arity(self) -> int:
        initializer = self.find_method(INITIALIZER)
        if initializer is None:
            return 0
        return initializer.arity()

    def call(self, evaluator: "Evaluator", arguments: List[Value]) -> Value:
        instance = LoxInstance(self)
        initializer = self.find_method(INITIALIZER)
        if initializer is not None:
            initializer.bind(instance).call(evaluator, arguments)
        return instance

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        parent = f" < {self.superclass.name}" if self.superclass else ""
        return f"LoxClass({self.name}{parent})"


#==============================================================================
# Instance
#==============================================================================

class LoxInstance:
    """An object: a field map plus a reference to its class"""

    kind = "instance"

    def __init__(self, klass: LoxClass):
        self.klass = klass
        self.fields: Dict[str, Value] = {}

    def get(self, name: Token) -> Value:
        """
        Read a property: own fields first, then methods up the class chain.

        Raises:
            LoxRuntimeError: UndefinedProperty if neither exists
        """
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]

        method = self.klass.find_method(name.lexeme)
        if method is not None:
            return method.bind(self)

        raise LoxRuntimeError.undefined_property(name)

    def set(self, name: Token, value: Value) -> None:
        """Write a field, creating it on first assignment"""
        self.fields[name.lexeme] = value

    def __str__(self) -> str:
        return f"{self.klass.name} instance"

    def __repr__(self) -> str:
        return f"LoxInstance({self.klass.name}, fields={sorted(self.fields)})"
