import pytest

from commandy.extract.response import FALLBACK_CONFIDENCE, PRIMARY_CONFIDENCE


def _commands(suggestions):
    return [s.command for s in suggestions]


def test_line_scenario(parser):
    out = parser.parse("ls -la\n# comment\ndocker ps -a\n", 2)
    assert _commands(out) == ["ls -la", "docker ps -a"]
    assert all(s.confidence == PRIMARY_CONFIDENCE for s in out)
    assert all(s.explanation is None for s in out)


def test_primary_respects_max(parser):
    out = parser.parse("ls -la\ngit status\ndocker ps -a\n", 2)
    assert _commands(out) == ["ls -la", "git status"]


def test_primary_strips_and_skips_long_lines(parser):
    raw = "   ls -la   \n" + "ls " + "a" * 300 + "\n"
    assert _commands(parser.parse(raw, 5)) == ["ls -la"]


@pytest.mark.parametrize(
    "line, expected",
    [
        ("ls", True),
        ("frob --all", True),
        ("frob -x", True),
        ("frob-tool", False),
        ("frob", False),
        ("Here are some commands", False),
        ("", False),
    ],
)
def test_looks_like_command(parser, line, expected):
    assert parser.looks_like_command(line) is expected


def test_heuristic_lines_still_need_validation(parser):
    out = parser.parse("Here is one - maybe\nfrob --all\n", 5)
    assert _commands(out) == ["frob --all"]


def test_fallback_prose_scenario(parser):
    out = parser.parse("You should try docker ps -a to see containers.", 3)
    assert _commands(out) == ["docker ps -a to see containers"]
    assert all(s.confidence == FALLBACK_CONFIDENCE for s in out)


def test_fallback_splits_on_starters_and_sentences(parser):
    raw = "First run ls -la then use grep foo bar.txt to search."
    out = parser.parse(raw, 5)
    assert _commands(out) == ["ls -la then use", "grep foo bar.txt to search"]


def test_fallback_respects_max(parser):
    raw = "First run ls -la then use grep foo bar.txt to search."
    assert _commands(parser.parse(raw, 1)) == ["ls -la then use"]


def test_fallback_flushes_at_end_of_input(parser):
    assert _commands(parser.parse("Try: docker ps", 3)) == ["docker ps"]


def test_fallback_skips_very_long_words(parser):
    raw = "Try docker " + "x" * 101 + " ps"
    assert _commands(parser.parse(raw, 3)) == ["docker ps"]


def test_fallback_never_emits_dangerous_commands(parser):
    assert parser.parse("Never run rm -rf / on a server.", 3) == []


def test_nothing_found(parser):
    assert parser.parse("I cannot help with that.", 3) == []
    assert parser.parse("", 3) == []


def test_fallback_not_run_when_primary_finds_something(parser, monkeypatch):
    def boom(*a, **kw):
        raise AssertionError("fallback should not run")

    monkeypatch.setattr(parser, "extract_fallback", boom)
    out = parser.parse("ls -la\nYou could also try docker ps.", 3)
    assert _commands(out) == ["ls -la"]
    assert [s.confidence for s in out] == [PRIMARY_CONFIDENCE]


def test_zero_max(parser):
    assert parser.parse("ls -la", 0) == []


def test_fallback_drops_space_before_lone_punctuation(parser):
    assert _commands(parser.parse("Run ls .", 3)) == ["ls"]


def test_lines_split_only_on_newline(parser):
    # a form feed is not a line break
    out = parser.parse("ls -la\x0cgit status\r\ndocker ps -a\r\n", 5)
    assert _commands(out) == ["ls -la\x0cgit status", "docker ps -a"]
