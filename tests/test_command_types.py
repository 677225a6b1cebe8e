"""Tests for flags, tree structure and tree execution."""

import pytest

from treeprompt.commands import Command, CommandError, Flag, FlagSet, command, flag, group
from tests.factories import node


def run(root, *tokens):
    root.set_args(list(tokens))
    return root.execute()


class TestFlag:
    def test_type_inferred_from_default(self):
        assert Flag("verbose", default=False).type_name == "bool"
        assert Flag("count", default=1).type_name == "int"
        assert Flag("ratio", default=0.5).type_name == "float"
        assert Flag("color", default="red").type_name == "string"

    def test_def_value_is_command_line_text(self):
        assert Flag("verbose", default=False).def_value == "false"
        assert Flag("count", default=1).def_value == "1"
        assert Flag("color", default="red").def_value == "red"

    def test_set_parses_and_reset_restores(self):
        count = Flag("count", default=1)
        count.set("7")
        assert count.value == 7 and count.changed
        count.reset()
        assert count.value == 1 and not count.changed

    def test_bool_spellings(self):
        verbose = Flag("verbose", default=False)
        verbose.set("yes")
        assert verbose.value is True
        verbose.set("off")
        assert verbose.value is False
        with pytest.raises(ValueError):
            verbose.set("maybe")

    def test_invalid_declarations(self):
        with pytest.raises(ValueError):
            Flag("")
        with pytest.raises(ValueError):
            Flag("color", shorthand="co")
        with pytest.raises(ValueError):
            Flag("color", type_name="colour")

    def test_matches_long_and_short_forms(self):
        color = Flag("color", default="red", shorthand="c")
        assert color.matches("--color") and color.matches("-c")
        assert not color.matches("-") and not color.matches("--c")


class TestFlagSet:
    def test_declaration_order_and_lookup(self):
        flags = FlagSet()
        flags.add(Flag("zeta", shorthand="z"))
        flags.add(Flag("alpha"))
        assert [f.name for f in flags] == ["zeta", "alpha"]
        assert flags.lookup("alpha").name == "alpha"
        assert flags.shorthand_lookup("z").name == "zeta"
        assert "alpha" in flags and len(flags) == 2

    def test_duplicates_rejected(self):
        flags = FlagSet()
        flags.add(Flag("color", shorthand="c"))
        with pytest.raises(ValueError):
            flags.add(Flag("color"))
        with pytest.raises(ValueError):
            flags.add(Flag("count", shorthand="c"))


class TestTreeStructure:
    def test_children_keep_insertion_order(self, item_tree):
        assert [c.name for c in item_tree.commands()] == ["quit", "show", "add", "secret"]

    def test_duplicate_child_name_rejected(self, item_tree):
        with pytest.raises(ValueError):
            item_tree.add_command(Command(name="show"))

    def test_alias_collision_rejected(self, item_tree):
        with pytest.raises(ValueError):
            item_tree.add_command(Command(name="display", aliases=["show"]))

    def test_invalid_child_name_rejected(self, item_tree):
        with pytest.raises(ValueError):
            item_tree.add_command(Command(name="two words"))

    def test_command_path(self, item_tree):
        assert node(item_tree, "add apple").command_path() == "add apple"
        assert item_tree.command_path() == ""

    def test_walk_is_depth_first(self, item_tree):
        assert [c.command_path() for c in item_tree.walk()] == [
            "", "quit", "show", "add", "add apple", "add melon", "secret"]

    def test_local_and_inherited_flags(self, item_tree):
        apple = node(item_tree, "add apple")
        assert [f.name for f in apple.local_flags()] == ["color", "verbose"]
        assert [f.name for f in apple.inherited_flags()] == ["count", "profile"]
        add = node(item_tree, "add")
        assert [f.name for f in add.local_flags()] == ["trace", "count"]

    def test_flag_name_must_be_unique_in_visible_set(self, item_tree):
        apple = node(item_tree, "add apple")
        with pytest.raises(ValueError):
            apple.add_flag("count", 2)
        with pytest.raises(ValueError):
            apple.add_flag("number", 2, shorthand="n")

    def test_persistent_flag_checked_against_descendants(self, item_tree):
        with pytest.raises(ValueError):
            node(item_tree, "add").add_flag("size", 1, persistent=True)

    def test_attached_subtree_checked_against_inherited(self, item_tree):
        pear = Command(name="pear", callback=lambda c, a: None)
        pear.add_flag("count", 1)
        with pytest.raises(ValueError):
            node(item_tree, "add").add_command(pear)

    def test_availability(self, item_tree):
        assert node(item_tree, "add").is_available()
        assert not node(item_tree, "secret").is_available()
        assert not Command(name="empty").is_available()

    def test_value_of_unknown_flag(self, item_tree):
        with pytest.raises(KeyError):
            node(item_tree, "add apple").value("size")


class TestFind:
    def test_skips_flags_and_their_values(self, item_tree):
        target, rest = item_tree.find(["add", "--count", "2", "apple", "x"])
        assert target is node(item_tree, "add apple")
        assert rest == ["--count", "2", "x"]

    def test_stops_at_unknown_token(self, item_tree):
        target, rest = item_tree.find(["add", "pear"])
        assert target is node(item_tree, "add")
        assert rest == ["pear"]


class TestExecute:
    @pytest.mark.parametrize("tokens", [
        ["--color=green"],
        ["--color", "green"],
        ["-c", "green"],
        ["-cgreen"],
        ["-c=green"],
    ])
    def test_flag_spellings(self, item_tree, calls, tokens):
        run(item_tree, "add", "apple", *tokens)
        assert calls[-1][1]["color"] == "green"

    def test_bool_flag_without_value(self, item_tree, calls):
        run(item_tree, "add", "apple", "-v")
        assert calls[-1][1]["verbose"] is True

    def test_bool_flag_with_inline_value(self, item_tree, calls):
        run(item_tree, "add", "apple", "--verbose=false")
        assert calls[-1][1]["verbose"] is False

    def test_double_dash_ends_flags(self, item_tree, calls):
        run(item_tree, "add", "apple", "--", "--color", "x")
        assert calls[-1][1]["color"] == "red"
        assert calls[-1][2] == ["--color", "x"]

    def test_hidden_command_runs(self, item_tree, calls):
        run(item_tree, "secret")
        assert calls[-1][0] == "secret"

    def test_missing_value(self, item_tree):
        with pytest.raises(CommandError, match="flag needs an argument: --color"):
            run(item_tree, "add", "apple", "--color")

    def test_invalid_value(self, item_tree):
        with pytest.raises(CommandError, match="invalid argument 'x'"):
            run(item_tree, "add", "apple", "-n", "x")

    def test_unknown_shorthand(self, item_tree):
        with pytest.raises(CommandError, match="unknown shorthand flag"):
            run(item_tree, "add", "apple", "-z")

    def test_help_flag(self, item_tree, calls):
        text = run(item_tree, "add", "apple", "--help")
        assert calls == []
        assert "Usage:\n  add apple [flags]" in text
        assert "-c, --color string" in text
        assert "Global Flags:" in text
        assert "--count int" in text
        assert "--profile" not in text

    def test_deprecated_command_still_runs(self, item_tree, calls):
        item_tree.add_command(Command(name="old", callback=lambda c, a: "ran", deprecated="use show"))
        assert run(item_tree, "old") == "ran"


class TestBuilders:
    def test_command_decorator(self):
        root = Command()
        tools = group("tools", "Tool box", parent=root,
                      persistent_flags=[flag("dry-run", False, "Only print")])

        @command(parent=tools, flags=[flag("level", 2, "Level", shorthand="l")])
        def fix_all(cmd, args):
            """Fix everything.

            Goes through every item and fixes it.
            """
            return f"{cmd.value('level')} {cmd.value('dry-run')}"

        assert fix_all.name == "fix-all"
        assert fix_all.short == "Fix everything."
        assert "Goes through every item" in fix_all.long
        assert tools.child("fix-all") is fix_all
        root.set_args(["tools", "fix-all", "-l", "5", "--dry-run"])
        assert root.execute() == "5 True"
