import os
import sys

import pytest


def pytest_configure():
    # Ensure the flat module root is importable for `state_machine`, `utils`, ...
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    if root not in sys.path:
        sys.path.insert(0, root)


@pytest.fixture
def scripted_tree():
    from lemon_tree import ScriptedLemonTree

    return ScriptedLemonTree([3])


@pytest.fixture
def fsm(scripted_tree):
    from state_machine import LemonadeStateMachine

    return LemonadeStateMachine(scripted_tree)
