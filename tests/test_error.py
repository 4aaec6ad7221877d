import logging

from mathsolver import error as E
from mathsolver.logging_config import setup_logging, to_level
from mathsolver.Tokenizer import SourceSpan


def test_kind_sets_the_code():
    error = E.ParseError("Missing ')'", kind=E.ErrorKind.UNMATCHED_PAREN)
    assert error.code == "3009"
    assert isinstance(error, E.MathError)


def test_message_includes_position():
    error = E.LexError("Unexpected character: '#'", kind=E.ErrorKind.UNEXPECTED_CHARACTER,
                       span=SourceSpan(2, 2, 1, 3))
    assert str(error) == "Unexpected character: '#' (line 1, column 3)"


def test_describe():
    assert E.describe(E.EvalError("Division by zero", kind=E.ErrorKind.DIVISION_BY_ZERO)) == \
        ("Calculator Error 3003", "Division by zero")
    assert E.describe(E.SettingsError("bad"))[0] == "Configuration Error 5001"
    assert E.describe(E.MathError("boom"))[0] == "Unexpected Error 9999"


def test_setup_logging_accepts_level_names(tmp_path):
    log_file = tmp_path / "mathsolver.log"
    logger = setup_logging("debug", log_file=log_file)
    try:
        assert logger.level == logging.DEBUG
        logging.getLogger("mathsolver.Parser").debug("hello from the parser")
        for handler in logger.handlers:
            handler.flush()
        assert "hello from the parser" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


def test_setup_logging_unknown_level_falls_back_to_info():
    logger = setup_logging("chatty")
    try:
        assert logger.level == logging.INFO
    finally:
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


def test_setup_logging_twice_keeps_one_handler():
    setup_logging("info")
    logger = setup_logging("warning")
    try:
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.WARNING
    finally:
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


def test_to_level():
    assert to_level(logging.DEBUG) == logging.DEBUG
    assert to_level(" Error ") == logging.ERROR
    assert to_level(None) == logging.INFO


def test_unexpected_crash_message():
    error = E.MathError(E.ERROR_MESSAGES["9999"] + "boom", equation="1+1")
    assert E.describe(error) == ("Unexpected Error 9999", "Unexpected Error: boom")
    assert set(E.ERROR_MESSAGES) == {"4002", "4501", "9999"}
