"""Tests for console helpers: ANSI handling, tables and logging."""

import logging

from treeprompt.ui import (
    ColorizingStreamHandler,
    colorize,
    format_table,
    init_logger,
    strip_ansi,
    visible_width,
)


def test_colorize_and_strip():
    text = colorize("apple", "red", "bold")
    assert text == "\x1b[31m\x1b[1mapple\x1b[0m"
    assert strip_ansi(text) == "apple"
    assert visible_width(text) == 5
    assert colorize("apple", "no-such-style") == "apple"


def test_strip_osc_title():
    assert strip_ansi("\x1b]0;title\x07items> ") == "items> "


def test_table_aligns_on_visible_width():
    table = format_table([[colorize("add", "green"), "Add an item"], ["show", "Show items"]])
    assert strip_ansi(table).splitlines() == [
        "  add    Add an item",
        "  show   Show items",
    ]


def test_table_with_headers_trims_trailing_space():
    table = format_table([["apple", ""]], headers=["NAME", "NOTE"], indent=0, gap=1)
    assert table.splitlines() == ["NAME  NOTE", "apple"]


def test_init_logger_does_not_duplicate_handlers(tmp_path):
    name = "treeprompt.test_ui"
    logfile = tmp_path / "shell.log"
    logger = init_logger(name, "INFO", str(logfile))
    init_logger(name, "ERROR", str(logfile))
    try:
        assert sum(isinstance(h, ColorizingStreamHandler) for h in logger.handlers) == 1
        assert len(logger.handlers) == 2
        logger.debug("\x1b[31mcoloured\x1b[0m detail")
        for handler in logger.handlers:
            handler.flush()
        content = logfile.read_text(encoding="utf-8")
        assert "[DEBUG] treeprompt.test_ui: coloured detail" in content
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
