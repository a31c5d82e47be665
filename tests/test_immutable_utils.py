"""Tests for converting plain and pydantic state into persistent collections."""

from typing import List

from immutables import Map
from pydantic import BaseModel

from pyselectx import default_comparator, to_dict, to_immutable


class Todo(BaseModel):
    title: str
    done: bool = False
    tags: List[str] = []


def test_to_immutable_converts_nested_containers() -> None:
    state = to_immutable({"todos": [{"id": 1, "tags": {"home"}}], "filter": "all"})

    assert isinstance(state, Map)
    assert isinstance(state["todos"], tuple)
    assert isinstance(state["todos"][0], Map)
    assert state["todos"][0]["tags"] == frozenset({"home"})
    assert state["filter"] == "all"


def test_to_immutable_converts_pydantic_models() -> None:
    todo = to_immutable(Todo(title="write docs", tags=["docs"]))

    assert todo == Map(title="write docs", done=False, tags=("docs",))


def test_equal_models_compare_equal_after_conversion() -> None:
    a = to_immutable(Todo(title="ship"))
    b = to_immutable(Todo(title="ship"))
    c = to_immutable(Todo(title="ship", done=True))

    assert default_comparator(a, b) is True
    assert default_comparator(a, c) is False


def test_to_dict_restores_plain_containers() -> None:
    raw = {"todos": [{"id": 1, "done": False}], "ids": [1]}

    assert to_dict(to_immutable(raw)) == raw


def test_scalars_are_left_untouched() -> None:
    assert to_immutable(5) == 5
    assert to_immutable("text") == "text"
    assert to_immutable(None) is None
    assert to_dict(5) == 5


def test_to_dict_keeps_set_members_hashable() -> None:
    raw = {"edges": {(1, 2), (2, 3)}}

    restored = to_dict(to_immutable(raw))

    assert restored == raw
    assert isinstance(restored["edges"], set)


def test_to_dict_recurses_into_plain_containers() -> None:
    mixed = {"outer": [Map(a=(1, 2))], "plain": {"inner": Map(b=3)}}

    assert to_dict(mixed) == {"outer": [{"a": [1, 2]}], "plain": {"inner": {"b": 3}}}
