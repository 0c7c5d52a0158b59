"""Tests for style tag translation."""

from typo3_console.console.formatter import STYLES, create_theme, to_markup


def test_known_tags_become_markup():
    """Test known tags are converted to Rich markup."""
    assert to_markup("<info>done</info>") == "[info]done[/info]"


def test_short_closing_tag():
    """Test </> closes the innermost open tag."""
    assert to_markup("<b><error>x</></>") == "[b][error]x[/error][/b]"


def test_unknown_tags_are_kept():
    """Test unknown tags stay literal."""
    assert to_markup("<foo>x</foo>") == "<foo>x</foo>"


def test_unmatched_closing_tags_are_kept():
    """Test closing tags without an opening tag stay literal."""
    assert to_markup("x</b></>") == "x</b></>"


def test_square_brackets_are_escaped():
    """Test literal Rich markup is escaped."""
    assert to_markup("[bold]x[/bold]") == "\\[bold]x\\[/bold]"


def test_theme_has_every_style():
    """Test the theme defines every tag style."""
    theme = create_theme()
    for name in STYLES:
        assert name in theme.styles
