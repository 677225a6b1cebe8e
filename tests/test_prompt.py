"""Tests for the TreePrompt facade and its frontends."""

import io

import pytest

from treeprompt.interface import BaseCLI, Suggestion, TreePrompt, make_cli


def test_prefix_is_live_and_replaceable(item_tree):
    shell = TreePrompt(item_tree)
    assert shell.get_prefix() == ("> ", True)
    shell.set_prompt_prefix("\x1b[32mitems\x1b[0m> ")
    assert shell.get_prefix() == ("\x1b[32mitems\x1b[0m> ", True)


def test_custom_flag_value_completer(item_tree):
    seen = []

    def colours(hint):
        seen.append(hint.flag.name)
        return [Suggestion("blue", "sky")]

    shell = TreePrompt(item_tree, flag_value_completer=colours)
    assert shell.complete("add apple --color ", "") == [Suggestion("blue", "sky")]
    assert seen == ["color"]

    shell.set_flag_value_completer(None)
    assert shell.complete("add apple --color ", "") == [Suggestion("red", "default value")]


def test_execute_delegates_to_dispatcher(item_tree, calls):
    shell = TreePrompt(item_tree)
    assert shell.execute("add melon -s 5") is True
    assert calls[-1][0] == "add melon"
    assert calls[-1][1]["size"] == 5


class TestMakeCli:
    def test_plain(self, item_tree):
        assert type(make_cli(TreePrompt(item_tree), "plain")) is BaseCLI

    def test_auto_without_terminal(self, item_tree, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert type(make_cli(TreePrompt(item_tree), "auto")) is BaseCLI

    def test_unknown_frontend(self, item_tree):
        with pytest.raises(ValueError):
            make_cli(TreePrompt(item_tree), "curses")


class TestPromptToolkitCompleter:
    @pytest.fixture
    def completer(self, item_tree):
        pytest.importorskip("prompt_toolkit")
        from treeprompt.interface import PromptToolkitCLI

        return PromptToolkitCLI(TreePrompt(item_tree)).completer

    def test_replaces_word_before_cursor(self, completer):
        from prompt_toolkit.document import Document

        items = list(completer.get_completions(Document("add ap"), None))
        assert [c.text for c in items] == ["apple"]
        assert items[0].start_position == -2
        assert items[0].display_meta_text == "Add apple"

    def test_flag_word_is_replaced_whole(self, completer):
        from prompt_toolkit.document import Document

        items = list(completer.get_completions(Document("add melon --s"), None))
        assert [c.text for c in items] == ["--size"]
        assert items[0].start_position == -3


def test_run_loop_until_eof(item_tree, calls, monkeypatch, capsys):
    lines = iter(["add apple -c green", KeyboardInterrupt, "", "nonsense", "show"])
    prompts = []

    def fake_input(prefix=""):
        prompts.append(prefix)
        item = next(lines, EOFError)
        if isinstance(item, type):
            raise item()
        return item

    monkeypatch.setattr("builtins.input", fake_input)
    shell = TreePrompt(item_tree, prompt_prefix="items> ", history_path=None, frontend="plain")
    shell.run()

    assert [c[0] for c in calls] == ["add apple", "show"]
    assert calls[0][1]["color"] == "green"
    assert set(prompts) == {"items> "}
    assert len(prompts) == 6
    assert "unknown command 'nonsense'" in capsys.readouterr().out


def test_quit_command_ends_run(item_tree, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prefix="": "quit")
    shell = TreePrompt(item_tree, frontend="plain")
    with pytest.raises(SystemExit):
        shell.run()
