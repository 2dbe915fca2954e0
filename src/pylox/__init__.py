"""
pylox Runtime Core

A tree-walking evaluator for a small dynamically typed, lexically scoped
scripting language with closures, classes and single inheritance. Programs
arrive as an AST built by an external parser.
"""

from __future__ import annotations

#==============================================================================
# Types
#==============================================================================

from pylox.types import (
    # Tokens
    Token,
    TokenType,
    # AST unions
    Expr,
    Stmt,
    # Expressions
    LiteralExpr,
    GroupingExpr,
    UnaryExpr,
    BinaryExpr,
    LogicalExpr,
    VariableExpr,
    AssignExpr,
    CallExpr,
    GetExpr,
    SetExpr,
    ThisExpr,
    SuperExpr,
    # Statements
    ExpressionStmt,
    PrintStmt,
    VarStmt,
    BlockStmt,
    IfStmt,
    WhileStmt,
    FunctionStmt,
    ReturnStmt,
    ClassStmt,
    # Values
    Value,
    NilVal,
    BoolVal,
    NumberVal,
    StringVal,
)

#==============================================================================
# Value Constructors and Helpers
#==============================================================================

from pylox.types import (
    NIL,
    nil_val,
    bool_val,
    number_val,
    string_val,
    from_python,
    is_truthy,
    values_equal,
    stringify,
)

#==============================================================================
# Errors
#==============================================================================

from pylox.errors import (
    ErrorCodes,
    LoxRuntimeError,
    ValidationError,
    ValidationResult,
    format_runtime_error,
)

#==============================================================================
# Runtime Objects
#==============================================================================

from pylox.env import Environment

from pylox.callables import (
    LoxCallable,
    LoxFunction,
    BoundMethod,
    NativeFunction,
)

from pylox.classes import (
    LoxClass,
    LoxInstance,
)

from pylox.natives import (
    NativeRegistry,
    create_default_natives,
    define_native,
    empty_native_registry,
)

#==============================================================================
# Evaluation
#==============================================================================

from pylox.evaluator import (
    Evaluator,
    EvalOptions,
    ReturnSignal,
    interpret,
)

#==============================================================================
# Validation
#==============================================================================

from pylox.validator import validate_program

__version__ = "0.1.0"

__all__ = [
    #==========================================================================
    # Types
    #==========================================================================
    "Token",
    "TokenType",
    "Expr",
    "Stmt",
    "LiteralExpr",
    "GroupingExpr",
    "UnaryExpr",
    "BinaryExpr",
    "LogicalExpr",
    "VariableExpr",
    "AssignExpr",
    "CallExpr",
    "GetExpr",
    "SetExpr",
    "ThisExpr",
    "SuperExpr",
    "ExpressionStmt",
    "PrintStmt",
    "VarStmt",
    "BlockStmt",
    "IfStmt",
    "WhileStmt",
    "FunctionStmt",
    "ReturnStmt",
    "ClassStmt",
    "Value",
    "NilVal",
    "BoolVal",
    "NumberVal",
    "StringVal",

    #==========================================================================
    # Value Constructors and Helpers
    #==========================================================================
    "NIL",
    "nil_val",
    "bool_val",
    "number_val",
    "string_val",
    "from_python",
    "is_truthy",
    "values_equal",
    "stringify",

    #==========================================================================
    # Errors
    #==========================================================================
    "ErrorCodes",
    "LoxRuntimeError",
    "ValidationError",
    "ValidationResult",
    "format_runtime_error",

    #==========================================================================
    # Runtime Objects
    #==========================================================================
    "Environment",
    "LoxCallable",
    "LoxFunction",
    "BoundMethod",
    "NativeFunction",
    "LoxClass",
    "LoxInstance",
    "NativeRegistry",
    "create_default_natives",
    "define_native",
    "empty_native_registry",

    #==========================================================================
    # Evaluation
    #==========================================================================
    "Evaluator",
    "EvalOptions",
    "ReturnSignal",
    "interpret",

    #==========================================================================
    # Validation
    #==========================================================================
    "validate_program",
]
