import pytest

from mathsolver import presentation
from mathsolver.Evaluator import CalculationStep


@pytest.mark.parametrize("text, width, expected", [
    ("short", 10, "short"),
    ("exactly10!", 10, "exactly10!"),
    ("a long step text", 10, "a long ..."),
    ("abcdef", 3, "abc"),
    ("anything", None, "anything"),
])
def test_truncate_step_text(text, width, expected):
    assert presentation.truncate_step_text(text, width) == expected


def test_render_step():
    step = CalculationStep("2 + 3", "Add 2 and 3", "5")
    assert presentation.render_step(step) == "2 + 3 => Add 2 and 3 => 5"
    assert len(presentation.render_step(step, 12)) == 12


def test_render_steps_notes_dropped_steps(session):
    session.max_steps = 1
    result = session.evaluate("1+2+3", trace=True)
    lines = presentation.render_steps(result)
    assert lines == ["1 + 2 => Add 1 and 2 => 3", "(1 more steps not shown)"]


@pytest.mark.parametrize("text, expected", [
    ("x = 2 + 3", ("x", "2 + 3")),
    ("rate=0.5", ("rate", "0.5")),
    ("2 + 3", (None, "2 + 3")),
    ("sin = 3", (None, "sin = 3")),
    ("x =", (None, "x =")),
    ("a = b = 1", (None, "a = b = 1")),
])
def test_split_assignment(text, expected):
    assert presentation.split_assignment(text) == expected
