from dataclasses import dataclass

from clikit.category import CommandCategories, CommandCategory


@dataclass
class FakeCommand:
    name: str
    hidden: bool = False


def test_add_command_groups_by_category():
    c1 = FakeCommand("command1")
    c2 = FakeCommand("command2")
    c3 = FakeCommand("command3")
    cats = CommandCategories()
    cats.add_command("1", c1)
    cats.add_command("1", c2)
    cats.add_command("2", c3)
    assert cats.categories() == [
        CommandCategory(name="1", commands=[c1, c2]),
        CommandCategory(name="2", commands=[c3]),
    ]


def test_categories_keep_insertion_order():
    cats = CommandCategories()
    for name in ["b", "a", "c", "a"]:
        cats.add_command(name, FakeCommand(name))
    assert [cat.name for cat in cats.categories()] == ["b", "a", "c"]
    assert len(cats) == 3


def test_categories_returns_copy():
    cats = CommandCategories()
    cats.add_command("x", FakeCommand("one"))
    listing = cats.categories()
    listing.clear()
    assert len(cats.categories()) == 1


def test_iteration_matches_categories():
    cats = CommandCategories()
    cats.add_command("1", FakeCommand("a"))
    cats.add_command("2", FakeCommand("b"))
    assert list(cats) == cats.categories()


def test_visible_commands_skips_hidden():
    shown = FakeCommand("command2")
    hidden = FakeCommand("command1", hidden=True)
    cat = CommandCategory(name="2", commands=[hidden, shown])
    assert cat.visible_commands() == [shown]


def test_visible_commands_of_empty_category():
    assert CommandCategory(name="empty").visible_commands() == []


def test_all_hidden_category_has_no_visible_commands():
    cats = CommandCategories()
    cats.add_command("3", FakeCommand("command3", hidden=True))
    (only,) = cats.categories()
    assert only.visible_commands() == []
    assert only.name == "3"