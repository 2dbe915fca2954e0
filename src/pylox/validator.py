# pylox Document Validator
# Structural validation of JSON AST documents and conversion to AST nodes

from __future__ import annotations

import re
from typing import Any, Callable, Optional

from pylox.errors import (
    ValidationError,
    ValidationResult,
    invalid_result,
    valid_result,
)
from pylox.types import (
    LEXEME_TYPES,
    Token,
    TokenType,
    Expr,
    Stmt,
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


#==============================================================================
# Validation Patterns
#==============================================================================

ID_PATTERN = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')
SEMVER_PATTERN = re.compile(r'^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$')

UNARY_OPERATORS = {TokenType.BANG, TokenType.MINUS}
BINARY_OPERATORS = {
    TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH,
    TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
    TokenType.EQUAL_EQUAL, TokenType.BANG_EQUAL,
}
LOGICAL_OPERATORS = {TokenType.AND, TokenType.OR}


#==============================================================================
# Validation State
#==============================================================================

class ValidationState:
    """State tracking during validation"""

    def __init__(self) -> None:
        self.errors: list[ValidationError] = []
        self.path: list[str] = []

    def push_path(self, segment: str) -> None:
        """Push a path segment onto the validation path"""
        self.path.append(segment)

    def pop_path(self) -> None:
        """Pop the last path segment from the validation path"""
        self.path.pop()

    def current_path(self) -> str:
        """Get the current validation path as a dot-separated string"""
        return ".".join(self.path) if self.path else "$"

    def add_error(self, message: str, value: Any | None = None) -> None:
        """Add a validation error to the state"""
        self.errors.append(ValidationError(
            path=self.current_path(),
            message=message,
            value=value,
        ))


#==============================================================================
# Primitive Validators
#==============================================================================

def validate_string(value: Any) -> bool:
    """Check if value is a string"""
    return isinstance(value, str)


def validate_array(value: Any) -> bool:
    """Check if value is a list"""
    return isinstance(value, list)


def validate_object(value: Any) -> bool:
    """Check if value is a dict (object)"""
    return isinstance(value, dict)


def validate_id(value: Any) -> bool:
    """Check if value is a valid identifier string"""
    return isinstance(value, str) and ID_PATTERN.match(value) is not None


def validate_version(value: Any) -> bool:
    """Check if value is a valid semantic version string"""
    return isinstance(value, str) and SEMVER_PATTERN.match(value) is not None


def validate_literal(value: Any) -> bool:
    """Check if value is a JSON null, boolean, number or string"""
    return value is None or isinstance(value, (bool, int, float, str))


def validate_number_range(value: Any) -> bool:
    """Check that an integer literal fits in a double"""
    if isinstance(value, bool) or not isinstance(value, int):
        return True
    try:
        float(value)
    except OverflowError:
        return False
    return True


#==============================================================================
# Field Helpers
#==============================================================================

def _field(
    state: ValidationState,
    node: dict[str, Any],
    name: str,
    convert: Callable[..., Any],
    *args: Any,
    optional: bool = False,
) -> Any:
    """Convert ``node[name]`` under its own path segment"""
    if name not in node or (optional and node[name] is None):
        if not optional:
            state.add_error(f"Missing required field '{name}'")
        return None

    state.push_path(name)
    try:
        return convert(state, node[name], *args)
    finally:
        state.pop_path()


def _list_field(
    state: ValidationState,
    node: dict[str, Any],
    name: str,
    convert: Callable[..., Any],
    *args: Any,
) -> list[Any]:
    """Convert every element of the array ``node[name]``"""
    if name not in node:
        state.add_error(f"Missing required field '{name}'")
        return []

    items = node[name]
    state.push_path(name)
    try:
        if not validate_array(items):
            state.add_error(f"'{name}' must be an array", items)
            return []
        result = []
        for i, item in enumerate(items):
            state.push_path(str(i))
            result.append(convert(state, item, *args))
            state.pop_path()
        return result
    finally:
        state.pop_path()


#==============================================================================
# Token Conversion
#==============================================================================

def convert_token(
    state: ValidationState,
    value: Any,
    allowed: Optional[set[TokenType]] = None,
) -> Optional[Token]:
    """
    Convert a token object.

    Tokens look like ``{"lexeme": "x", "line": 3, "type": "IDENTIFIER"}``.
    ``line`` defaults to 0. ``type`` is inferred from the lexeme for
    operators and keywords, and otherwise defaults to IDENTIFIER.

    Args:
        state: Validation state
        value: Raw JSON value
        allowed: Token types accepted at this position (None for names)

    Returns:
        The Token, or None if invalid
    """
    if not validate_object(value):
        state.add_error("Token must be an object", value)
        return None

    lexeme = value.get("lexeme")
    if not validate_string(lexeme):
        state.add_error("Token must have a string 'lexeme'", value)
        return None

    line = value.get("line", 0)
    if isinstance(line, bool) or not isinstance(line, int) or line < 0:
        state.add_error("Token 'line' must be a non-negative integer", line)
        return None

    if "type" in value:
        try:
            token_type = TokenType(value["type"])
        except ValueError:
            state.add_error(f"Unknown token type: {value['type']}", value)
            return None
    elif allowed is not None:
        token_type = LEXEME_TYPES.get(lexeme, TokenType.IDENTIFIER)
    else:
        token_type = TokenType.IDENTIFIER

    if allowed is None:
        if token_type == TokenType.IDENTIFIER and not validate_id(lexeme):
            state.add_error(f"Invalid identifier: {lexeme!r}", value)
            return None
    elif token_type not in allowed:
        state.add_error(f"Token {lexeme!r} is not allowed here", value)
        return None

    return Token(token_type, lexeme, value.get("literal"), line)


def convert_keyword(state: ValidationState, value: Any, token_type: TokenType) -> Optional[Token]:
    """Convert a keyword or punctuation token of a fixed type"""
    return convert_token(state, value, {token_type})


#==============================================================================
# Expression Conversion
#==============================================================================

def convert_expr(state: ValidationState, value: Any) -> Optional[Expr]:
    """Validate an expression node and build its AST form"""
    if not validate_object(value):
        state.add_error("Expression must be an object", value)
        return None

    kind = value.get("kind")
    if not validate_string(kind):
        state.add_error("Expression must have 'kind' property", value)
        return None

    if kind == "literal":
        if "value" not in value:
            state.add_error("Missing required field 'value'")
            return None
        if not validate_literal(value["value"]):
            state.add_error("Literal value must be null, boolean, number or string", value["value"])
            return None
        if not validate_number_range(value["value"]):
            state.add_error("Number literal is out of range", value["value"])
            return None
        return LiteralExpr(value["value"])

    elif kind == "grouping":
        inner = _field(state, value, "expression", convert_expr)
        return GroupingExpr(inner)

    elif kind == "unary":
        operator = _field(state, value, "operator", convert_token, UNARY_OPERATORS)
        right = _field(state, value, "right", convert_expr)
        return UnaryExpr(operator, right)

    elif kind == "binary":
        left = _field(state, value, "left", convert_expr)
        operator = _field(state, value, "operator", convert_token, BINARY_OPERATORS)
        right = _field(state, value, "right", convert_expr)
        return BinaryExpr(left, operator, right)

    elif kind == "logical":
        left = _field(state, value, "left", convert_expr)
        operator = _field(state, value, "operator", convert_token, LOGICAL_OPERATORS)
        right = _field(state, value, "right", convert_expr)
        return LogicalExpr(left, operator, right)

    elif kind == "variable":
        return VariableExpr(_field(state, value, "name", convert_token))

    elif kind == "assign":
        name = _field(state, value, "name", convert_token)
        assigned = _field(state, value, "value", convert_expr)
        return AssignExpr(name, assigned)

    elif kind == "call":
        callee = _field(state, value, "callee", convert_expr)
        paren = _field(state, value, "paren", convert_keyword, TokenType.RIGHT_PAREN)
        arguments = _list_field(state, value, "arguments", convert_expr)
        return CallExpr(callee, paren, arguments)

    elif kind == "get":
        obj = _field(state, value, "object", convert_expr)
        name = _field(state, value, "name", convert_token)
        return GetExpr(obj, name)

    elif kind == "set":
        obj = _field(state, value, "object", convert_expr)
        name = _field(state, value, "name", convert_token)
        assigned = _field(state, value, "value", convert_expr)
        return SetExpr(obj, name, assigned)

    elif kind == "this":
        return ThisExpr(_field(state, value, "keyword", convert_keyword, TokenType.THIS))

    elif kind == "super":
        keyword = _field(state, value, "keyword", convert_keyword, TokenType.SUPER)
        method = _field(state, value, "method", convert_token)
        return SuperExpr(keyword, method)

    else:
        state.add_error(f"Unknown expression kind: {kind}", kind)
        return None


#==============================================================================
# Statement Conversion
#==============================================================================

def convert_function(state: ValidationState, value: Any) -> Optional[FunctionStmt]:
    """Validate a function declaration (also used for methods)"""
    if not validate_object(value):
        state.add_error("Function must be an object", value)
        return None
    if value.get("kind") != "function":
        state.add_error("Expected a 'function' node", value.get("kind"))
        return None

    name = _field(state, value, "name", convert_token)
    params = _list_field(state, value, "params", convert_token)
    body = _list_field(state, value, "body", convert_stmt)

    seen: set[str] = set()
    for param in params:
        if param is None:
            continue
        if param.lexeme in seen:
            state.add_error(f"Duplicate parameter: {param.lexeme}")
        seen.add(param.lexeme)

    return FunctionStmt(name, params, body)


def convert_stmt(state: ValidationState, value: Any) -> Optional[Stmt]:
    """Validate a statement node and build its AST form"""
    if not validate_object(value):
        state.add_error("Statement must be an object", value)
        return None

    kind = value.get("kind")
    if not validate_string(kind):
        state.add_error("Statement must have 'kind' property", value)
        return None

    if kind == "expression":
        return ExpressionStmt(_field(state, value, "expression", convert_expr))

    elif kind == "print":
        return PrintStmt(_field(state, value, "expression", convert_expr))

    elif kind == "var":
        name = _field(state, value, "name", convert_token)
        initializer = _field(state, value, "initializer", convert_expr, optional=True)
        return VarStmt(name, initializer)

    elif kind == "block":
        return BlockStmt(_list_field(state, value, "statements", convert_stmt))

    elif kind == "if":
        condition = _field(state, value, "condition", convert_expr)
        then_branch = _field(state, value, "then_branch", convert_stmt)
        else_branch = _field(state, value, "else_branch", convert_stmt, optional=True)
        return IfStmt(condition, then_branch, else_branch)

    elif kind == "while":
        condition = _field(state, value, "condition", convert_expr)
        body = _field(state, value, "body", convert_stmt)
        return WhileStmt(condition, body)

    elif kind == "function":
        return convert_function(state, value)

    elif kind == "return":
        keyword = _field(state, value, "keyword", convert_keyword, TokenType.RETURN)
        returned = _field(state, value, "value", convert_expr, optional=True)
        return ReturnStmt(keyword, returned)

    elif kind == "class":
        name = _field(state, value, "name", convert_token)
        superclass = _field(state, value, "superclass", convert_expr, optional=True)
        if superclass is not None and not isinstance(superclass, VariableExpr):
            state.add_error("Superclass must be a 'variable' expression", value.get("superclass"))
            superclass = None
        methods = _list_field(state, value, "methods", convert_function)
        return ClassStmt(name, superclass, methods)

    else:
        state.add_error(f"Unknown statement kind: {kind}", kind)
        return None


#==============================================================================
# Document Validation
#==============================================================================

def validate_program(doc: Any) -> ValidationResult:
    """
    Validate a JSON AST document and convert it to statements.

    Expected shape::

        {"version": "1.0.0", "statements": [ ... ]}

    Args:
        doc: Parsed JSON document

    Returns:
        ValidationResult whose value is the statement list when valid
    """
    state = ValidationState()

    if not validate_object(doc):
        state.add_error("Document must be an object", doc)
        return invalid_result(state.errors)

    if "version" in doc and not validate_version(doc["version"]):
        state.push_path("version")
        state.add_error("Invalid version format", doc["version"])
        state.pop_path()

    statements = _list_field(state, doc, "statements", convert_stmt)

    if state.errors:
        return invalid_result(state.errors)
    return valid_result(statements)
