# presentation.py
"""Text helpers for showing results and step traces in a fixed-width area."""

from .SymbolTable import is_valid_name

ELLIPSIS = "..."
MIN_WIDTH = len(ELLIPSIS) + 1


def truncate_step_text(text, width):
    """Shorten text to at most width characters, marking the cut with '...'."""
    if width is None or len(text) <= width:
        return text
    if width < MIN_WIDTH:
        return text[:max(width, 0)]
    return text[:width - len(ELLIPSIS)] + ELLIPSIS


def render_step(step, width=None):
    line = f"{step.expression} => {step.operation} => {step.result}"
    return truncate_step_text(line, width)


def render_steps(result, width=None):
    """One display line per recorded step, plus a note when steps were dropped."""
    lines = [render_step(step, width) for step in result.steps]
    if result.dropped_steps:
        lines.append(truncate_step_text(f"({result.dropped_steps} more steps not shown)", width))
    return lines


def split_assignment(text):
    """Split 'name = expression' into (name, expression); plain expressions give (None, text)."""
    if text.count("=") != 1:
        return None, text

    name, expression = (part.strip() for part in text.split("="))
    if not is_valid_name(name) or not expression:
        return None, text
    return name, expression
