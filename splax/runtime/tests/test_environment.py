import pytest

from splax.exceptions import ErrorCode, SplaxError, UnboundVariable
from splax.lexer.core.classes import Token, TokenType
from splax.runtime.core.environment import Environment


@pytest.fixture
def globals_env():
    env = Environment()
    env.define("x", 1.0)
    return env


def test_define_and_get(globals_env):
    assert globals_env.get("x") == 1.0
    assert globals_env.depth == 0
    assert globals_env.enclosing is None


def test_define_overwrites_in_same_scope(globals_env):
    globals_env.define("x", "again")
    assert globals_env.get("x") == "again"


def test_shadowing_does_not_touch_outer_binding(globals_env):
    inner = Environment(globals_env)
    inner.define("x", 2.0)

    assert inner.get("x") == 2.0
    inner.discard()
    assert globals_env.get("x") == 1.0


def test_inner_scope_reads_through_the_chain(globals_env):
    with globals_env.enclose() as block:
        with block.enclose() as nested:
            assert nested.get("x") == 1.0
            assert nested.depth == 2


def test_assign_mutates_enclosing_binding():
    outer = Environment()
    outer.define("y", 0.0)
    inner = outer.enclose()

    previous = inner.assign("y", 5.0)

    assert previous == 0.0
    assert outer.get("y") == 5.0
    assert not inner.contains("z")
    inner.discard()
    assert outer.get("y") == 5.0


def test_assign_hits_nearest_binding_only():
    outer = Environment()
    outer.define("v", "outer")
    middle = outer.enclose()
    middle.define("v", "middle")
    inner = middle.enclose()

    inner.assign("v", "changed")

    assert middle.get("v") == "changed"
    assert outer.get("v") == "outer"


@pytest.mark.parametrize("operation", ["get", "assign"])
def test_unbound_name_fails_from_any_scope(operation):
    outer = Environment()
    inner = outer.enclose().enclose()

    for env in (inner, outer):
        with pytest.raises(UnboundVariable) as excinfo:
            if operation == "get":
                env.get("missing")
            else:
                env.assign("missing", 1.0)
        assert excinfo.value.code == ErrorCode.UNDEFINED_VARIABLE
        assert excinfo.value.name == "missing"


def test_failed_assign_does_not_create_a_binding():
    env = Environment()
    with pytest.raises(UnboundVariable):
        env.assign("ghost", 1.0)
    assert not env.contains("ghost")


def test_token_names_carry_their_line():
    env = Environment()
    name = Token(type=TokenType.IDENTIFIER, lexeme="late", line=7)

    with pytest.raises(UnboundVariable) as excinfo:
        env.get(name)

    assert excinfo.value.diagnostic == (7, "[line 7] Error: Reference to undefined variable 'late'.")

    env.define(name, True)
    assert env.get("late") is True


def test_unbound_variable_is_recoverable():
    env = Environment()
    try:
        env.get("nope")
    except UnboundVariable:
        pass
    env.define("nope", None)
    assert env.get("nope") is None


def test_get_returns_a_copy():
    env = Environment()
    items = ["a"]
    env.define("items", items)

    copied = env.get("items")
    copied.append("b")

    assert env.get("items") == ["a"]


def test_discard_is_last_in_first_out(globals_env):
    block = globals_env.enclose()
    nested = block.enclose()

    with pytest.raises(SplaxError) as excinfo:
        block.discard()
    assert excinfo.value.code == ErrorCode.SCOPE_STILL_ENCLOSING

    nested.discard()
    block.discard()


def test_discarded_scope_cannot_be_used(globals_env):
    block = globals_env.enclose()
    block.discard()

    with pytest.raises(SplaxError) as excinfo:
        block.get("x")
    assert excinfo.value.code == ErrorCode.SCOPE_DISCARDED

    with pytest.raises(SplaxError):
        block.discard()


def test_global_scope_cannot_be_discarded(globals_env):
    with pytest.raises(SplaxError) as excinfo:
        globals_env.discard()
    assert excinfo.value.code == ErrorCode.GLOBAL_SCOPE_DISCARD


def test_context_manager_discards_on_error(globals_env):
    with pytest.raises(UnboundVariable):
        with globals_env.enclose() as block:
            block.get("missing")

    assert block.index not in block.arena.records
    assert globals_env.arena.records[globals_env.index].live_children == 0


def test_sibling_scopes_are_independent(globals_env):
    first = globals_env.enclose()
    first.define("only_first", 1.0)
    first.discard()

    second = globals_env.enclose()
    assert second.index != first.index
    assert not second.contains("only_first")
    assert second.enclosing.index == globals_env.index


def test_discarded_scopes_are_freed(globals_env):
    arena = globals_env.arena
    for _ in range(10_000):
        with globals_env.enclose() as block:
            with block.enclose() as nested:
                nested.define("i", 0.0)

    assert len(arena) == 1
    assert list(arena.records) == [globals_env.index]

    # Indices keep counting up after the records are gone.
    fresh = globals_env.enclose()
    assert fresh.index == 20_001
    fresh.discard()
