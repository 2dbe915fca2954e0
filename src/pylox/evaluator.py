"""
pylox Evaluator
Tree-walking execution of statements and evaluation of expressions

The evaluator walks the AST depth-first. Expressions evaluate to a Value or
raise LoxRuntimeError; statements execute for effect and report how they
completed. A ``return`` does not raise: it produces a ReturnSignal that each
enclosing statement hands back up until the nearest function call consumes it.
"""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, TypeAlias

from pylox.callables import LoxFunction
from pylox.classes import INITIALIZER, LoxClass
from pylox.env import Environment
from pylox.errors import LoxRuntimeError, exhaustive
from pylox.natives import NativeRegistry, create_default_natives
from pylox.types import (
    Expr, Stmt, Token, TokenType, Value,
    LiteralExpr, UnaryExpr, BinaryExpr, LogicalExpr,
    AssignExpr, CallExpr, GetExpr, SetExpr, SuperExpr,
    ClassStmt,
    NIL,
    bool_val, number_val, string_val, from_python,
    is_callable, is_instance, is_number, is_string, is_truthy,
    stringify, values_equal,
)

logger = logging.getLogger(__name__)


#==============================================================================
# Evaluation Options
#==============================================================================

OutputSink: TypeAlias = Callable[[str], None]


def stdout_sink(line: str) -> None:
    """Default output sink: one line per print on standard output"""
    sys.stdout.write(line + "\n")


@dataclass
class EvalOptions:
    """Options for program evaluation"""
    trace: bool = False


#==============================================================================
# Completion Signals
#==============================================================================

@dataclass(frozen=True)
class ReturnSignal:
    """Non-local exit carrying the value of a return statement"""
    value: Value


# None means the statement completed normally
Completion: TypeAlias = Optional[ReturnSignal]


#==============================================================================
# Arithmetic Helpers
#==============================================================================

def divide(left: float, right: float) -> float:
    """IEEE division: dividing by zero yields an infinity or NaN"""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


#==============================================================================
# Evaluator Class
#==============================================================================

class Evaluator:
    """
    Tree-walking evaluator holding the interpreter state.

    All state lives on the instance: the global environment, the output sink
    and the options. The active environment is passed explicitly to every
    evaluation step, so evaluators are independent of one another.
    """

    def __init__(
        self,
        output: Optional[OutputSink] = None,
        natives: Optional[NativeRegistry] = None,
        options: Optional[EvalOptions] = None,
    ):
        """
        Initialize the evaluator.

        Args:
            output: Receives one line of text per print statement
            natives: Native functions to define as globals (default: clock)
            options: Evaluation options
        """
        self._output = output if output is not None else stdout_sink
        self._options = options or EvalOptions()
        self._globals = Environment()

        registry = natives if natives is not None else create_default_natives()
        for native in registry:
            self._globals.define(native.name, native)

    @property
    def globals(self) -> Environment:
        """Get the global environment"""
        return self._globals

    @property
    def options(self) -> EvalOptions:
        return self._options

    #---------------------------------------------------------------------------
    # Public Evaluation API
    #---------------------------------------------------------------------------

    def interpret(self, statements: Sequence[Stmt]) -> None:
        """
        Execute a program in the global environment.

        Args:
            statements: Top-level statements in source order

        Raises:
            LoxRuntimeError: On the first runtime error; later statements
                are not executed
        """
        for stmt in statements:
            if self._execute(stmt, self._globals) is not None:
                logger.warning("return outside of a function; stopping")
                return

    def execute(self, stmt: Stmt, env: Optional[Environment] = None) -> Completion:
        """Execute one statement (in the global scope by default)"""
        return self._execute(stmt, env if env is not None else self._globals)

    def evaluate(self, expr: Expr, env: Optional[Environment] = None) -> Value:
        """Evaluate one expression (in the global scope by default)"""
        return self._eval_expr(expr, env if env is not None else self._globals)

    def execute_block(self, statements: Sequence[Stmt], env: Environment) -> Completion:
        """
        Execute statements in order under ``env``.

        Stops at the first statement that completes with a ReturnSignal and
        hands that signal back.
        """
        for stmt in statements:
            signal = self._execute(stmt, env)
            if signal is not None:
                return signal
        return None

    #---------------------------------------------------------------------------
    # Statement Execution (Dispatch)
    #---------------------------------------------------------------------------

    def _execute(self, stmt: Stmt, env: Environment) -> Completion:
        kind = stmt.kind

        if self._options.trace:
            logger.debug(f"[exec] {kind}")

        if kind == "expression":
            self._eval_expr(stmt.expression, env)
            return None

        elif kind == "print":
            value = self._eval_expr(stmt.expression, env)
            self._output(stringify(value))
            return None

        elif kind == "var":
            value = NIL
            if stmt.initializer is not None:
                value = self._eval_expr(stmt.initializer, env)
            env.define(stmt.name.lexeme, value)
            return None

        elif kind == "block":
            return self.execute_block(stmt.statements, Environment(env))

        elif kind == "if":
            if is_truthy(self._eval_expr(stmt.condition, env)):
                return self._execute(stmt.then_branch, env)
            if stmt.else_branch is not None:
                return self._execute(stmt.else_branch, env)
            return None

        elif kind == "while":
            while is_truthy(self._eval_expr(stmt.condition, env)):
                signal = self._execute(stmt.body, env)
                if signal is not None:
                    return signal
            return None

        elif kind == "function":
            env.define(stmt.name.lexeme, LoxFunction(stmt, env))
            return None

        elif kind == "return":
            value = NIL
            if stmt.value is not None:
                value = self._eval_expr(stmt.value, env)
            return ReturnSignal(value)

        elif kind == "class":
            self._exec_class(stmt, env)
            return None

        else:
            exhaustive(stmt)

    def _exec_class(self, stmt: ClassStmt, env: Environment) -> None:
        """
        Declare a class.

        When a superclass is present the methods close over an extra scope
        binding ``super``, so super lookups are resolved lexically.
        """
        superclass = None
        if stmt.superclass is not None:
            superclass = self._eval_expr(stmt.superclass, env)
            if not isinstance(superclass, LoxClass):
                raise LoxRuntimeError.not_a_class(stmt.superclass.name)

        env.define(stmt.name.lexeme, NIL)

        method_env = env
        if superclass is not None:
            method_env = Environment(env)
            method_env.define("super", superclass)

        methods = {
            method.name.lexeme: LoxFunction(method, method_env, method.name.lexeme == INITIALIZER)
            for method in stmt.methods
        }
        klass = LoxClass(stmt.name.lexeme, superclass, methods)

        if self._options.trace:
            logger.debug(f"[class] {klass!r} with {len(methods)} methods")

        env.assign(stmt.name, klass)

    #---------------------------------------------------------------------------
    # Expression Evaluation (Dispatch)
    #---------------------------------------------------------------------------

    def _eval_expr(self, expr: Expr, env: Environment) -> Value:
        kind = expr.kind

        if kind == "literal":
            return self._eval_literal(expr, env)
        elif kind == "grouping":
            return self._eval_expr(expr.expression, env)
        elif kind == "unary":
            return self._eval_unary(expr, env)
        elif kind == "binary":
            return self._eval_binary(expr, env)
        elif kind == "logical":
            return self._eval_logical(expr, env)
        elif kind == "variable":
            return env.get(expr.name)
        elif kind == "assign":
            return self._eval_assign(expr, env)
        elif kind == "call":
            return self._eval_call(expr, env)
        elif kind == "get":
            return self._eval_get(expr, env)
        elif kind == "set":
            return self._eval_set(expr, env)
        elif kind == "this":
            return env.get(expr.keyword)
        elif kind == "super":
            return self._eval_super(expr, env)
        else:
            exhaustive(expr)

    def _eval_literal(self, expr: LiteralExpr, env: Environment) -> Value:
        value = expr.value
        # Already a runtime value (e.g. built programmatically)
        if hasattr(value, "kind"):
            return value
        return from_python(value)

    def _eval_unary(self, expr: UnaryExpr, env: Environment) -> Value:
        right = self._eval_expr(expr.right, env)
        op = expr.operator.type

        if op == TokenType.BANG:
            return bool_val(not is_truthy(right))
        elif op == TokenType.MINUS:
            if not is_number(right):
                raise LoxRuntimeError.operand_not_number(expr.operator)
            return number_val(-right.value)
        else:
            exhaustive(expr.operator)

    def _eval_binary(self, expr: BinaryExpr, env: Environment) -> Value:
        left = self._eval_expr(expr.left, env)
        right = self._eval_expr(expr.right, env)
        operator = expr.operator
        op = operator.type

        if op == TokenType.EQUAL_EQUAL:
            return bool_val(values_equal(left, right))
        elif op == TokenType.BANG_EQUAL:
            return bool_val(not values_equal(left, right))

        elif op == TokenType.PLUS:
            if is_number(left) and is_number(right):
                return number_val(left.value + right.value)
            if is_string(left) and is_string(right):
                return string_val(left.value + right.value)
            raise LoxRuntimeError.bad_plus_operands(operator)

        # Everything else is numeric only
        if not (is_number(left) and is_number(right)):
            raise LoxRuntimeError.operands_not_numbers(operator)
        a, b = left.value, right.value

        if op == TokenType.MINUS:
            return number_val(a - b)
        elif op == TokenType.STAR:
            return number_val(a * b)
        elif op == TokenType.SLASH:
            return number_val(divide(a, b))
        elif op == TokenType.GREATER:
            return bool_val(a > b)
        elif op == TokenType.GREATER_EQUAL:
            return bool_val(a >= b)
        elif op == TokenType.LESS:
            return bool_val(a < b)
        elif op == TokenType.LESS_EQUAL:
            return bool_val(a <= b)
        else:
            exhaustive(operator)

    def _eval_logical(self, expr: LogicalExpr, env: Environment) -> Value:
        """Short-circuit and/or, yielding the deciding operand itself"""
        left = self._eval_expr(expr.left, env)

        if expr.operator.type == TokenType.OR:
            if is_truthy(left):
                return left
        else:
            if not is_truthy(left):
                return left

        return self._eval_expr(expr.right, env)

    def _eval_assign(self, expr: AssignExpr, env: Environment) -> Value:
        value = self._eval_expr(expr.value, env)
        env.assign(expr.name, value)
        return value

    def _eval_call(self, expr: CallExpr, env: Environment) -> Value:
        callee = self._eval_expr(expr.callee, env)
        if not is_callable(callee):
            raise LoxRuntimeError.not_callable(expr.paren)

        arguments: List[Value] = [self._eval_expr(arg, env) for arg in expr.arguments]

        if len(arguments) != callee.arity():
            raise LoxRuntimeError.arity_mismatch(callee.arity(), len(arguments), expr.paren)

        if self._options.trace:
            logger.debug(f"[call] {callee!r} at line {expr.paren.line}")

        return callee.call(self, arguments)

    def _eval_get(self, expr: GetExpr, env: Environment) -> Value:
        obj = self._eval_expr(expr.object, env)
        if not is_instance(obj):
            raise LoxRuntimeError.not_an_instance(expr.name)
        return obj.get(expr.name)

    def _eval_set(self, expr: SetExpr, env: Environment) -> Value:
        obj = self._eval_expr(expr.object, env)
        if not is_instance(obj):
            raise LoxRuntimeError.not_an_instance(expr.name)

        value = self._eval_expr(expr.value, env)
        obj.set(expr.name, value)
        return value

    def _eval_super(self, expr: SuperExpr, env: Environment) -> Value:
        """
        Look a method up starting at the lexically captured superclass and
        bind it to the current receiver.
        """
        superclass = env.get(expr.keyword)
        receiver = env.get(Token(TokenType.THIS, "this", None, expr.keyword.line))

        method = superclass.find_method(expr.method.lexeme)
        if method is None:
            raise LoxRuntimeError.undefined_property(expr.method)

        return method.bind(receiver)


#==============================================================================
# Convenience API
#==============================================================================

def interpret(
    statements: Sequence[Stmt],
    output: Optional[OutputSink] = None,
    natives: Optional[NativeRegistry] = None,
    options: Optional[EvalOptions] = None,
) -> Evaluator:
    """
    Run a program with a fresh evaluator.

    Args:
        statements: Top-level statements
        output: Print sink (default: standard output)
        natives: Native registry (default: clock)
        options: Evaluation options

    Returns:
        The evaluator, so callers can inspect its globals

    Raises:
        LoxRuntimeError: If execution fails
    """
    evaluator = Evaluator(output=output, natives=natives, options=options)
    evaluator.interpret(statements)
    return evaluator
