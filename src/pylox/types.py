"""
pylox Type Definitions
Tokens, AST nodes and the primitive value domain

This module provides frozen dataclasses for the immutable syntax tree handed
over by the parser and for the primitive runtime values. Every node and value
carries a class-level ``kind`` tag used for dispatch.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    ClassVar,
    List,
    Optional,
    TypeAlias,
    Union,
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from pylox.callables import LoxCallable
    from pylox.classes import LoxInstance


#==============================================================================
# Tokens
#==============================================================================

class TokenType(str, Enum):
    """Token kinds that can appear inside an AST"""

    # Single-character tokens
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    LEFT_BRACE = "LEFT_BRACE"
    RIGHT_BRACE = "RIGHT_BRACE"
    COMMA = "COMMA"
    DOT = "DOT"
    MINUS = "MINUS"
    PLUS = "PLUS"
    SEMICOLON = "SEMICOLON"
    SLASH = "SLASH"
    STAR = "STAR"

    # One or two character tokens
    BANG = "BANG"
    BANG_EQUAL = "BANG_EQUAL"
    EQUAL = "EQUAL"
    EQUAL_EQUAL = "EQUAL_EQUAL"
    GREATER = "GREATER"
    GREATER_EQUAL = "GREATER_EQUAL"
    LESS = "LESS"
    LESS_EQUAL = "LESS_EQUAL"

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Keywords
    AND = "AND"
    CLASS = "CLASS"
    ELSE = "ELSE"
    FALSE = "FALSE"
    FUN = "FUN"
    IF = "IF"
    NIL = "NIL"
    OR = "OR"
    PRINT = "PRINT"
    RETURN = "RETURN"
    SUPER = "SUPER"
    THIS = "THIS"
    TRUE = "TRUE"
    VAR = "VAR"
    WHILE = "WHILE"

    EOF = "EOF"


# Lexeme to token type for fixed-spelling tokens
LEXEME_TYPES: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "/": TokenType.SLASH,
    "*": TokenType.STAR,
    "!": TokenType.BANG,
    "!=": TokenType.BANG_EQUAL,
    "=": TokenType.EQUAL,
    "==": TokenType.EQUAL_EQUAL,
    ">": TokenType.GREATER,
    ">=": TokenType.GREATER_EQUAL,
    "<": TokenType.LESS,
    "<=": TokenType.LESS_EQUAL,
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}


@dataclass(frozen=True)
class Token:
    """A lexical token as produced by the scanner"""
    type: TokenType
    lexeme: str
    literal: Any = None
    line: int = 0

    def __str__(self) -> str:
        return f"{self.type.value} {self.lexeme} {self.literal}"


#==============================================================================
# Expression AST
#==============================================================================

@dataclass(frozen=True)
class LiteralExpr:
    """Literal expression holding a raw token literal"""
    value: Any
    kind: ClassVar[str] = "literal"


@dataclass(frozen=True)
class GroupingExpr:
    """Parenthesized expression"""
    expression: Expr
    kind: ClassVar[str] = "grouping"


@dataclass(frozen=True)
class UnaryExpr:
    """Prefix operator expression (! or -)"""
    operator: Token
    right: Expr
    kind: ClassVar[str] = "unary"


@dataclass(frozen=True)
class BinaryExpr:
    """Arithmetic, comparison or equality expression"""
    left: Expr
    operator: Token
    right: Expr
    kind: ClassVar[str] = "binary"


@dataclass(frozen=True)
class LogicalExpr:
    """Short-circuiting and/or expression"""
    left: Expr
    operator: Token
    right: Expr
    kind: ClassVar[str] = "logical"


@dataclass(frozen=True)
class VariableExpr:
    """Variable reference"""
    name: Token
    kind: ClassVar[str] = "variable"


@dataclass(frozen=True)
class AssignExpr:
    """Assignment to an existing variable"""
    name: Token
    value: Expr
    kind: ClassVar[str] = "assign"


@dataclass(frozen=True)
class CallExpr:
    """Call expression; paren locates errors"""
    callee: Expr
    paren: Token
    arguments: List[Expr]
    kind: ClassVar[str] = "call"


@dataclass(frozen=True)
class GetExpr:
    """Property read"""
    object: Expr
    name: Token
    kind: ClassVar[str] = "get"


@dataclass(frozen=True)
class SetExpr:
    """Property write"""
    object: Expr
    name: Token
    value: Expr
    kind: ClassVar[str] = "set"


@dataclass(frozen=True)
class ThisExpr:
    """Reference to the current method receiver"""
    keyword: Token
    kind: ClassVar[str] = "this"


@dataclass(frozen=True)
class SuperExpr:
    """Superclass method access"""
    keyword: Token
    method: Token
    kind: ClassVar[str] = "super"


Expr: TypeAlias = Union[
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
]


#==============================================================================
# Statement AST
#==============================================================================

@dataclass(frozen=True)
class ExpressionStmt:
    """Expression evaluated for its side effects"""
    expression: Expr
    kind: ClassVar[str] = "expression"


@dataclass(frozen=True)
class PrintStmt:
    """Print the display text of a value"""
    expression: Expr
    kind: ClassVar[str] = "print"


@dataclass(frozen=True)
class VarStmt:
    """Variable declaration with optional initializer"""
    name: Token
    initializer: Optional[Expr] = None
    kind: ClassVar[str] = "var"


@dataclass(frozen=True)
class BlockStmt:
    """Braced block introducing a new scope"""
    statements: List[Stmt]
    kind: ClassVar[str] = "block"


@dataclass(frozen=True)
class IfStmt:
    """Conditional with optional else branch"""
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None
    kind: ClassVar[str] = "if"


@dataclass(frozen=True)
class WhileStmt:
    """Condition-driven loop"""
    condition: Expr
    body: Stmt
    kind: ClassVar[str] = "while"


@dataclass(frozen=True)
class FunctionStmt:
    """Function or method declaration"""
    name: Token
    params: List[Token]
    body: List[Stmt]
    kind: ClassVar[str] = "function"


@dataclass(frozen=True)
class ReturnStmt:
    """Return from the innermost call"""
    keyword: Token
    value: Optional[Expr] = None
    kind: ClassVar[str] = "return"


@dataclass(frozen=True)
class ClassStmt:
    """Class declaration with optional superclass"""
    name: Token
    superclass: Optional[VariableExpr]
    methods: List[FunctionStmt]
    kind: ClassVar[str] = "class"


Stmt: TypeAlias = Union[
    ExpressionStmt,
    PrintStmt,
    VarStmt,
    BlockStmt,
    IfStmt,
    WhileStmt,
    FunctionStmt,
    ReturnStmt,
    ClassStmt,
]


#==============================================================================
# Value Domain (runtime values)
#==============================================================================

@dataclass(frozen=True)
class NilVal:
    """The nil value"""
    kind: ClassVar[str] = "nil"


@dataclass(frozen=True)
class BoolVal:
    """Boolean value"""
    value: bool
    kind: ClassVar[str] = "bool"


@dataclass(frozen=True)
class NumberVal:
    """Double-precision number"""
    value: float
    kind: ClassVar[str] = "number"


@dataclass(frozen=True)
class StringVal:
    """String value"""
    value: str
    kind: ClassVar[str] = "string"


# Callables and instances live in their own modules and are mutable
Value: TypeAlias = Union[
    NilVal,
    BoolVal,
    NumberVal,
    StringVal,
    "LoxCallable",
    "LoxInstance",
]


#==============================================================================
# Value Constructors
#==============================================================================

NIL = NilVal()
TRUE = BoolVal(True)
FALSE = BoolVal(False)


def nil_val() -> NilVal:
    return NIL


def bool_val(value: bool) -> BoolVal:
    return TRUE if value else FALSE


def number_val(value: float) -> NumberVal:
    return NumberVal(float(value))


def string_val(value: str) -> StringVal:
    return StringVal(value)


def from_python(raw: Any) -> Value:
    """
    Convert a raw token literal into a runtime value.

    Args:
        raw: None, bool, int, float or str

    Returns:
        The matching primitive Value

    Raises:
        TypeError: If the literal has no value counterpart
    """
    if raw is None:
        return NIL
    # bool first: bool is a subclass of int
    if isinstance(raw, bool):
        return bool_val(raw)
    if isinstance(raw, (int, float)):
        return number_val(raw)
    if isinstance(raw, str):
        return string_val(raw)
    raise TypeError(f"Cannot convert literal of type {type(raw).__name__}")


#==============================================================================
# Value Predicates
#==============================================================================

def is_nil(v: Value) -> bool:
    return v.kind == "nil"


def is_bool(v: Value) -> bool:
    return v.kind == "bool"


def is_number(v: Value) -> bool:
    return v.kind == "number"


def is_string(v: Value) -> bool:
    return v.kind == "string"


def is_callable(v: Value) -> bool:
    return v.kind == "callable"


def is_instance(v: Value) -> bool:
    return v.kind == "instance"


def is_truthy(v: Value) -> bool:
    """Nil and false are falsy; everything else is truthy"""
    if is_nil(v):
        return False
    if is_bool(v):
        return v.value
    return True


def numbers_equal(a: float, b: float) -> bool:
    """
    Number equality with identity semantics for the IEEE corner cases.

    NaN equals NaN, and 0 and -0 are distinct.
    """
    if math.isnan(a) or math.isnan(b):
        return math.isnan(a) and math.isnan(b)
    return a == b and math.copysign(1.0, a) == math.copysign(1.0, b)


def values_equal(a: Value, b: Value) -> bool:
    """
    Language-level equality.

    Values of different kinds are never equal. Primitives compare by value
    (numbers via numbers_equal), callables and instances by identity.
    """
    if a.kind != b.kind:
        return False
    if is_nil(a):
        return True
    if is_number(a):
        return numbers_equal(a.value, b.value)
    if a.kind in ("bool", "string"):
        return a.value == b.value
    return a is b


#==============================================================================
# Display Text
#==============================================================================

def format_number(n: float) -> str:
    """Format a number, dropping the trailing .0 of integral values"""
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "Infinity" if n > 0 else "-Infinity"
    text = repr(n)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def stringify(v: Value) -> str:
    """Convert a value to the text written by a print statement"""
    kind = v.kind

    if kind == "nil":
        return "nil"
    elif kind == "bool":
        return "true" if v.value else "false"
    elif kind == "number":
        return format_number(v.value)
    elif kind == "string":
        return v.value
    else:
        return str(v)
