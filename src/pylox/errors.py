# pylox Error Types
# Error domain for runtime evaluation and document validation errors

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pylox.types import Token


#==============================================================================
# Error Codes
#==============================================================================

class ErrorCodes(str, Enum):
    """Error code constants for pylox errors"""

    # Lookup errors
    UNDEFINED_VARIABLE = "UndefinedVariable"
    UNDEFINED_PROPERTY = "UndefinedProperty"

    # Type errors
    TYPE_MISMATCH = "TypeMismatch"
    NOT_CALLABLE = "NotCallable"
    NOT_AN_INSTANCE = "NotAnInstance"
    NOT_A_CLASS = "NotAClass"

    # Call errors
    ARITY_MISMATCH = "ArityMismatch"

    # Validation errors
    VALIDATION_ERROR = "ValidationError"


#==============================================================================
# Runtime Error Class
#==============================================================================

class LoxRuntimeError(Exception):
    """Runtime error raised by the evaluator, located by its token"""

    def __init__(self, code: ErrorCodes, message: str, token: Token):
        super().__init__(message)
        self.code = code
        self.message = message
        self.token = token

    def __str__(self) -> str:
        return self.message

    @property
    def line(self) -> int:
        return self.token.line

    #---------------------------------------------------------------------------
    # Static factory methods for each error kind
    #---------------------------------------------------------------------------

    @staticmethod
    def undefined_variable(name: Token) -> "LoxRuntimeError":
        """Create an UndefinedVariable error"""
        return LoxRuntimeError(
            ErrorCodes.UNDEFINED_VARIABLE,
            f"Undefined variable '{name.lexeme}'.",
            name,
        )

    @staticmethod
    def undefined_property(name: Token) -> "LoxRuntimeError":
        """Create an UndefinedProperty error"""
        return LoxRuntimeError(
            ErrorCodes.UNDEFINED_PROPERTY,
            f"Undefined property '{name.lexeme}'.",
            name,
        )

    @staticmethod
    def operand_not_number(operator: Token) -> "LoxRuntimeError":
        """Create a TypeMismatch error for a unary operator"""
        return LoxRuntimeError(ErrorCodes.TYPE_MISMATCH, "Operand must be a number.", operator)

    @staticmethod
    def operands_not_numbers(operator: Token) -> "LoxRuntimeError":
        """Create a TypeMismatch error for a binary numeric operator"""
        return LoxRuntimeError(ErrorCodes.TYPE_MISMATCH, "Operands must be numbers.", operator)

    @staticmethod
    def bad_plus_operands(operator: Token) -> "LoxRuntimeError":
        """Create a TypeMismatch error for an ill-typed +"""
        return LoxRuntimeError(
            ErrorCodes.TYPE_MISMATCH,
            "Operands must be two numbers or two strings.",
            operator,
        )

    @staticmethod
    def not_callable(paren: Token) -> "LoxRuntimeError":
        """Create a NotCallable error"""
        return LoxRuntimeError(
            ErrorCodes.NOT_CALLABLE,
            "Can only call functions and classes.",
            paren,
        )

    @staticmethod
    def arity_mismatch(expected: int, got: int, paren: Token) -> "LoxRuntimeError":
        """Create an ArityMismatch error"""
        return LoxRuntimeError(
            ErrorCodes.ARITY_MISMATCH,
            f"Expected {expected} arguments but got {got}.",
            paren,
        )

    @staticmethod
    def not_an_instance(name: Token) -> "LoxRuntimeError":
        """Create a NotAnInstance error for property access"""
        return LoxRuntimeError(
            ErrorCodes.NOT_AN_INSTANCE,
            "Only instances have properties.",
            name,
        )

    @staticmethod
    def not_a_class(name: Token) -> "LoxRuntimeError":
        """Create a NotAClass error for a superclass clause"""
        return LoxRuntimeError(
            ErrorCodes.NOT_A_CLASS,
            "Superclass must be a class.",
            name,
        )


def format_runtime_error(error: LoxRuntimeError) -> str:
    """Format a runtime error for the driver as message plus line marker"""
    return f"{error.message}\n[line {error.line}]"


#==============================================================================
# Validation Error Types
#==============================================================================

class ValidationError:
    """A single validation error"""

    def __init__(self, path: str, message: str, value: Any | None = None):
        self.path = path
        self.message = message
        self.value = value

    def __repr__(self) -> str:
        return f"ValidationError({self.path!r}, {self.message!r})"


class ValidationResult:
    """Result of a validation operation"""

    def __init__(self, valid: bool, errors: list[ValidationError], value: Optional[Any] = None):
        self.valid = valid
        self.errors = errors
        self.value = value


def valid_result(value: Any) -> ValidationResult:
    """Create a successful validation result"""
    return ValidationResult(valid=True, errors=[], value=value)


def invalid_result(errors: list[ValidationError]) -> ValidationResult:
    """Create a failed validation result"""
    return ValidationResult(valid=False, errors=errors)


#==============================================================================
# Exhaustiveness Checking
#==============================================================================

def exhaustive(value: Any) -> None:
    """
    Asserts that a value is unreachable, ensuring exhaustive handling.
    Use in dispatch default cases to ensure all variants are handled.

    Raises:
        AssertionError: If called (indicating unhandled case)

    Example:
        kind = expr.kind
        if kind == "literal":
            return ...
        elif kind == "variable":
            return ...
        else:
            exhaustive(expr)  # Error if a kind is missing
    """
    raise AssertionError(f"Unexpected value: {value!r}")
