"""
pylox Native Registry
Host-implemented functions installed into the global scope

Provides NativeRegistry for collecting NativeFunction values by name, plus
the default built-ins every evaluator starts with.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, Iterator, List

from pylox.callables import NativeFunction
from pylox.types import Value, number_val


#==============================================================================
# Native Registry
#==============================================================================

class NativeRegistry:
    """
    Registry of native functions keyed by their global name.

    Native functions are defined into the global environment when an
    Evaluator is created.
    """

    def __init__(self) -> None:
        """Create an empty native registry"""
        self._natives: Dict[str, NativeFunction] = {}

    def register(self, native: NativeFunction) -> "NativeRegistry":
        """
        Register a native function.

        Args:
            native: The function to register

        Returns:
            self for chaining

        Raises:
            ValueError: If a native with the same name already exists
        """
        if native.name in self._natives:
            raise ValueError(f"Native {native.name} already registered")
        self._natives[native.name] = native
        return self

    def register_all(self, natives: List[NativeFunction]) -> "NativeRegistry":
        """Register multiple natives at once"""
        for native in natives:
            self.register(native)
        return self

    def __iter__(self) -> Iterator[NativeFunction]:
        return iter(self._natives.values())

    def __contains__(self, name: str) -> bool:
        return name in self._natives

    def __len__(self) -> int:
        return len(self._natives)


def define_native(name: str, params: int, impl: Callable[..., Value]) -> NativeFunction:
    """Helper to build a NativeFunction"""
    return NativeFunction(name, params, impl)


#==============================================================================
# Default Natives
#==============================================================================

def _clock_impl() -> Value:
    """Seconds since the epoch as a number"""
    return number_val(time.time())


default_natives: List[NativeFunction] = [
    define_native("clock", 0, _clock_impl),
]


def empty_native_registry() -> NativeRegistry:
    return NativeRegistry()


def create_default_natives() -> NativeRegistry:
    """Create a registry holding the default built-ins"""
    return NativeRegistry().register_all(default_natives)
