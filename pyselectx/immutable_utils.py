"""
狀態與持久化集合之間的轉換工具。

to_immutable 把普通容器與 Pydantic 模型轉為 default_comparator 能做結構比較的形式，
to_dict 則轉回普通容器，方便序列化或輸出。
"""
import functools
from typing import Any

from immutables import Map
from pydantic import BaseModel

__all__ = ["to_immutable", "to_dict"]


@functools.singledispatch
def to_immutable(obj: Any) -> Any:
    """
    將狀態轉換為不可變形式。

    BaseModel / dict / Map → Map，list / tuple → tuple，set / frozenset → frozenset，
    逐層遞迴；其他值原樣返回。
    """
    return obj


@to_immutable.register(BaseModel)
def _(obj: BaseModel) -> Map:
    return to_immutable(obj.model_dump())


@to_immutable.register(dict)
@to_immutable.register(Map)
def _(obj) -> Map:
    return Map({key: to_immutable(value) for key, value in obj.items()})


@to_immutable.register(list)
@to_immutable.register(tuple)
def _(obj) -> tuple:
    return tuple(to_immutable(item) for item in obj)


@to_immutable.register(set)
@to_immutable.register(frozenset)
def _(obj) -> frozenset:
    return frozenset(to_immutable(item) for item in obj)


@functools.singledispatch
def to_dict(obj: Any) -> Any:
    """
    將持久化集合轉回普通容器：Map → dict，tuple → list，frozenset → set。

    set 的成員保持原樣，因為它們必須維持可雜湊。
    """
    return obj


@to_dict.register(dict)
@to_dict.register(Map)
def _(obj) -> dict:
    return {key: to_dict(value) for key, value in obj.items()}


@to_dict.register(list)
@to_dict.register(tuple)
def _(obj) -> list:
    return [to_dict(item) for item in obj]


@to_dict.register(set)
@to_dict.register(frozenset)
def _(obj) -> set:
    return set(obj)
