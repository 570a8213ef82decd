import pytest

from hshell.tokens import (
    count_tokens,
    count_tokens_noquote,
    tokenize,
    tokenize_noquote,
)

CASES = [
    ["ls", "-l"],
    ["echo", "'a b'", '"c d"'],
    ["echo", "a\\ b"],
    ["x'y z'w", "next"],
    ["printf", '"%s\\n"', "$HOME"],
    ["a;b", "#c"],
]


@pytest.mark.parametrize("parts", CASES)
def test_tokenize_splits_on_unquoted_blanks(parts):
    assert tokenize(" ".join(parts)) == parts


@pytest.mark.parametrize("parts", CASES)
def test_surrounding_whitespace_is_ignored(parts):
    line = " ".join(parts)
    assert tokenize("  \t" + line + " \n") == tokenize(line)


@pytest.mark.parametrize("parts", CASES)
def test_count_tokens_matches_tokenize(parts):
    line = "\t".join(parts)
    assert count_tokens(line) == len(tokenize(line)) == len(parts)


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_blank_text_has_no_tokens(text):
    assert tokenize(text) == []
    assert count_tokens(text) == 0


def test_unterminated_quote_runs_to_end():
    quoted = "'abc def"
    assert tokenize("echo " + quoted) == ["echo", quoted]


def test_trailing_backslash_stays_in_word():
    assert tokenize("a\\") == ["a\\"]


def test_tokens_join_back_to_source_without_blanks():
    line = "one 'two three'  four\\ five"
    assert "".join(tokenize(line)) == line.replace(" ", "").replace(
        "twothree", "two three"
    ).replace("four\\five", "four\\ five")


def test_tokenize_noquote_ignores_quotes():
    line = "a 'b c'"
    assert tokenize_noquote(line) == line.split(" ")


def test_tokenize_noquote_only_splits_on_ascii_blanks():
    word = "a\x1cb"
    assert tokenize_noquote(" " + word + "\t") == [word]


@pytest.mark.parametrize("text", ["", "x", "  x  y ", "a\tb\nc", "'p q'"])
def test_count_tokens_noquote_matches(text):
    assert count_tokens_noquote(text) == len(tokenize_noquote(text))
    assert tokenize_noquote(text) == text.split()