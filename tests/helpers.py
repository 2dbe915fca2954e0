"""Small builders for writing ASTs by hand in tests."""

from __future__ import annotations

from typing import Any, Optional

from pylox.types import (
    LEXEME_TYPES,
    Token,
    TokenType,
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
    ExpressionStmt,
    PrintStmt,
    VarStmt,
    BlockStmt,
    IfStmt,
    WhileStmt,
    FunctionStmt,
    ReturnStmt,
    ClassStmt,
)


def tok(lexeme: str, line: int = 1, type: Optional[TokenType] = None) -> Token:
    if type is None:
        type = LEXEME_TYPES.get(lexeme, TokenType.IDENTIFIER)
    return Token(type, lexeme, None, line)


def name(lexeme: str, line: int = 1) -> Token:
    return Token(TokenType.IDENTIFIER, lexeme, None, line)


# Expressions

def lit(value: Any) -> LiteralExpr:
    return LiteralExpr(value)


def group(inner) -> GroupingExpr:
    return GroupingExpr(inner)


def unary(op: str, right, line: int = 1) -> UnaryExpr:
    return UnaryExpr(tok(op, line), right)


def binary(left, op: str, right, line: int = 1) -> BinaryExpr:
    return BinaryExpr(left, tok(op, line), right)


def logical(left, op: str, right) -> LogicalExpr:
    return LogicalExpr(left, tok(op), right)


def var(lexeme: str, line: int = 1) -> VariableExpr:
    return VariableExpr(name(lexeme, line))


def assign(lexeme: str, value, line: int = 1) -> AssignExpr:
    return AssignExpr(name(lexeme, line), value)


def call(callee, *args, line: int = 1) -> CallExpr:
    return CallExpr(callee, tok(")", line), list(args))


def get(obj, prop: str, line: int = 1) -> GetExpr:
    return GetExpr(obj, name(prop, line))


def set_(obj, prop: str, value, line: int = 1) -> SetExpr:
    return SetExpr(obj, name(prop, line), value)


def this() -> ThisExpr:
    return ThisExpr(tok("this"))


def super_(method: str) -> SuperExpr:
    return SuperExpr(tok("super"), name(method))


# Statements

def expr_stmt(expression) -> ExpressionStmt:
    return ExpressionStmt(expression)


def print_(expression) -> PrintStmt:
    return PrintStmt(expression)


def var_decl(lexeme: str, initializer=None) -> VarStmt:
    return VarStmt(name(lexeme), initializer)


def block(*statements) -> BlockStmt:
    return BlockStmt(list(statements))


def if_(condition, then_branch, else_branch=None) -> IfStmt:
    return IfStmt(condition, then_branch, else_branch)


def while_(condition, body) -> WhileStmt:
    return WhileStmt(condition, body)


def fun(fn_name: str, params: list[str], *body) -> FunctionStmt:
    return FunctionStmt(name(fn_name), [name(p) for p in params], list(body))


def ret(value=None) -> ReturnStmt:
    return ReturnStmt(tok("return"), value)


def class_(class_name: str, methods: list[FunctionStmt], superclass: Optional[str] = None) -> ClassStmt:
    parent = var(superclass) if superclass is not None else None
    return ClassStmt(name(class_name), parent, methods)
