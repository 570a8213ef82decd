import pytest

from hshell.expand import expand_alias, expand_aliases, expand_token, expand_vars
from hshell.state import ShellState


@pytest.fixture
def state():
    return ShellState(
        argv=["hsh"],
        env={"HOME": "/home/user", "X": "a b"},
        pid=4321,
        status=2,
    )


def test_expand_alias_replaces_first_word():
    name, tokens = expand_alias({"ll": "ls -l"}, ["ll", "/tmp"])
    assert name == "ll"
    assert tokens == ["ls", "-l", "/tmp"]


def test_expand_alias_without_match():
    name, tokens = expand_alias({"ll": "ls -l"}, ["ls", "/tmp"])
    assert name is None
    assert tokens == ["ls", "/tmp"]


def test_expand_alias_empty_tokens():
    assert expand_alias({"ll": "ls -l"}, []) == (None, [])


def test_expand_aliases_follows_chain():
    aliases = {"a": "b", "b": "c x"}
    assert expand_aliases(aliases, ["a", "y"]) == ["c", "x", "y"]


def test_expand_aliases_self_reference_stops():
    assert expand_aliases({"ls": "ls -l"}, ["ls"]) == ["ls", "-l"]


def test_expand_aliases_cycle_terminates():
    result = expand_aliases({"a": "b", "b": "a"}, ["a", "z"])
    assert result[0] in {"a", "b"}
    assert result[1:] == ["z"]


def test_expand_aliases_trailing_space_expands_next_word():
    aliases = {"s": "sudo ", "ll": "ls -l"}
    assert expand_aliases(aliases, ["s", "ll"]) == ["sudo", "ls", "-l"]


def test_expand_aliases_leaves_input_unchanged():
    tokens = ["ll"]
    expand_aliases({"ll": "ls -l"}, tokens)
    assert tokens == ["ll"]


def test_expand_variable(state):
    assert expand_token(state, "$HOME") == [state.env["HOME"]]


def test_expand_variable_inside_word(state):
    assert expand_token(state, "x$HOME") == ["x" + state.env["HOME"]]


def test_expand_status_and_pid(state):
    assert expand_token(state, "$?") == [str(state.status)]
    assert expand_token(state, "$$") == [str(state.pid)]


def test_unset_variable_expands_to_nothing(state):
    assert expand_token(state, "$UNSET") == []


def test_expansion_is_split_into_words(state):
    assert expand_token(state, "$X") == state.env["X"].split()


def test_double_quotes_keep_value_together(state):
    assert expand_token(state, '"$X"') == ['"' + state.env["X"] + '"']


def test_single_quotes_prevent_expansion(state):
    assert expand_token(state, "'$HOME'") == ["'$HOME'"]


@pytest.mark.parametrize("token", ["$", "$1", "plain"])
def test_non_variables_are_kept(state, token):
    assert expand_token(state, token) == [token]


def test_expand_vars_over_all_tokens(state):
    tokens = ["echo", "$X", "$HOME"]
    assert expand_vars(state, tokens) == ["echo", *state.env["X"].split(), state.env["HOME"]]


def test_expand_vars_empty(state):
    assert expand_vars(state, []) == []