import pytest

from pylox import Evaluator


@pytest.fixture
def output():
    return []


@pytest.fixture
def evaluator(output):
    return Evaluator(output=output.append)


@pytest.fixture
def run(evaluator, output):
    """Execute statements and return everything printed so far."""
    def _run(*statements):
        evaluator.interpret(list(statements))
        return output
    return _run
