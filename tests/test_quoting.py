import pytest

from hshell.quoting import (
    QuoteState,
    dequote,
    is_ident,
    is_number,
    is_quote,
    is_space,
    quote_state,
    quote_state_len,
)


@pytest.mark.parametrize(
    "char, expected",
    [
        (" ", QuoteState.NONE),
        ("\t", QuoteState.NONE),
        ("\n", QuoteState.NONE),
        ("\r", QuoteState.NONE),
        ('"', QuoteState.DOUBLE),
        ("'", QuoteState.SINGLE),
        ("\\", QuoteState.ESCAPE),
        ("a", QuoteState.WORD),
        ("$", QuoteState.WORD),
        (";", QuoteState.WORD),
        ("#", QuoteState.WORD),
    ],
)
def test_quote_state(char, expected):
    assert quote_state(char) == expected


def test_quote_state_flags_are_distinct_bits():
    openers = quote_state('"') | quote_state("'") | quote_state("\\")
    assert openers & quote_state("'")
    assert not openers & quote_state("a")
    assert not quote_state(" ")
    assert openers == QuoteState.DOUBLE | QuoteState.SINGLE | QuoteState.ESCAPE


def test_none_length_counts_leading_blanks():
    blanks = " \t  "
    assert quote_state_len(blanks + "abc", QuoteState.NONE) == len(blanks)
    assert quote_state_len("abc", QuoteState.NONE) == 0


@pytest.mark.parametrize("stop", [" ", "'", '"', "\\", "\n"])
def test_word_length_stops_at_blank_or_quote(stop):
    word = "ab;c$"
    assert quote_state_len(word + stop + "rest", QuoteState.WORD) == len(word)


def test_word_length_runs_to_end():
    word = "plain"
    assert quote_state_len(word, QuoteState.WORD) == len(word)


@pytest.mark.parametrize(
    "state, close", [(QuoteState.DOUBLE, '"'), (QuoteState.SINGLE, "'")]
)
def test_quoted_length(state, close):
    inside = "a b\\c"
    assert quote_state_len(inside + close + "tail", state) == len(inside)
    assert quote_state_len(inside, state) == len(inside)


def test_escape_length():
    assert quote_state_len("x", QuoteState.ESCAPE) == len("x")
    assert quote_state_len("xyz", QuoteState.ESCAPE) == len("x")
    assert quote_state_len("", QuoteState.ESCAPE) == 0


def test_quote_state_len_rejects_combined_state():
    with pytest.raises(ValueError):
        quote_state_len("abc", QuoteState.DOUBLE | QuoteState.SINGLE)


@pytest.mark.parametrize("char", list(" \t\n\v\f\r"))
def test_is_space_true(char):
    assert is_space(char) is True


@pytest.mark.parametrize("char", ["a", "", "\x1c", "\xa0", "_"])
def test_is_space_false(char):
    assert is_space(char) is False


def test_is_quote():
    assert [is_quote(c) for c in "\"'\\a$"] == [True, True, True, False, False]
    assert is_quote("") is False


@pytest.mark.parametrize("char", ["_", "a", "Z", "5"])
def test_is_ident_true(char):
    assert is_ident(char) is True


@pytest.mark.parametrize("char", ["-", "$", "\u00e9", "", " "])
def test_is_ident_false(char):
    assert is_ident(char) is False


@pytest.mark.parametrize("text", ["0", "123", "007", ""])
def test_is_number_true(text):
    assert is_number(text) is True


@pytest.mark.parametrize("text", ["12a", "-1", " 1", "\u0663", None])
def test_is_number_false(text):
    assert is_number(text) is False


@pytest.mark.parametrize("word", ["ls", "-l", "a$b", "x;y", ""])
def test_dequote_plain_word_unchanged(word):
    assert dequote(word) == word


@pytest.mark.parametrize("inside", ["a b", "$HOME", "x\\y", "\"q\""])
def test_dequote_single_quotes(inside):
    assert dequote("'" + inside + "'") == inside


@pytest.mark.parametrize("inside", ["a b", "it's", "\\n"])
def test_dequote_double_quotes(inside):
    assert dequote('"' + inside + '"') == inside


@pytest.mark.parametrize("char", ["a", " ", "'", '"', "$"])
def test_dequote_escape(char):
    assert dequote("\\" + char) == char


def test_dequote_unterminated_single_quote():
    assert dequote("'abc") == "abc"


def test_dequote_special_escape_inside_double_quotes():
    assert dequote('"a\\$b"') == "a$b"


def test_dequote_line_continuation_inside_double_quotes():
    assert dequote('"a\\\nb"') == "ab"


def test_dequote_mixed_segments():
    assert dequote("a'b c'\"d\"") == "ab cd"


def test_dequote_is_idempotent_on_unquoted_result():
    text = "'hello world'"
    once = dequote(text)
    assert dequote(once) == once