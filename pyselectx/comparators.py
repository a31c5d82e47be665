"""
比較器模組。

比較器是純函數 (previous, current) -> bool，用於判斷兩次取出的值是否「未變更」。
記憶化函數會逐一位置比較參數，全部通過時才重用快取結果。
"""
from typing import Any, Callable, Optional, Sequence

from immutables import Map

from .types import Comparator, SupportsDeepEquality

__all__ = [
    "simple_comparator",
    "default_comparator",
    "structural_comparator",
    "make_default_comparator",
    "is_persistent_collection",
    "deep_equals",
    "array_equals",
]

# 以值比較的不可變純量類型，其餘物件一律以 identity 比較
_SCALAR_TYPES = (str, bytes, int, float, complex, bool)

# 內建的持久化集合類型
_PERSISTENT_TYPES = (Map, tuple, frozenset)


def simple_comparator(a: Any, b: Any) -> bool:
    """
    嚴格相等比較。

    任一邊為 None 即視為不相等 (包括兩邊都是 None)，
    因此首次呼叫與前值為 None 的情況一定會重新計算。
    """
    if a is None or b is None:
        return False
    if isinstance(a, _SCALAR_TYPES):
        return type(a) is type(b) and a == b
    return a is b


def is_persistent_collection(x: Any) -> bool:
    """判斷 x 是否為可以做結構比較的持久化集合。"""
    return isinstance(x, _PERSISTENT_TYPES) or isinstance(x, SupportsDeepEquality)


def _member_equals(x: Any, y: Any) -> bool:
    # 集合內的成員：巢狀持久化集合遞迴比較，純量以值比較，其餘以 identity
    if x is y:
        return True
    if is_persistent_collection(x) and is_persistent_collection(y):
        return deep_equals(x, y)
    if isinstance(x, _SCALAR_TYPES):
        return type(x) is type(y) and x == y
    return False


def deep_equals(a: Any, b: Any) -> bool:
    """
    兩個持久化集合的結構相等比較。

    只有持久化集合會往下展開；集合內的 list / dict 等普通容器仍然只比較 reference，
    純量必須型別相同 (True 與 1 不相等)。
    """
    if a is b:
        return True
    if isinstance(a, SupportsDeepEquality):
        return a.deep_equals(b)
    if isinstance(b, SupportsDeepEquality):
        return b.deep_equals(a)
    if type(a) is not type(b) or len(a) != len(b):
        return False
    if isinstance(a, Map):
        if any(key not in b for key in a):
            return False
        return all(_member_equals(a[key], b[key]) for key in a)
    if isinstance(a, tuple):
        return all(_member_equals(x, y) for x, y in zip(a, b))
    # frozenset：每個成員都要在另一邊找到相等的成員
    return all(any(_member_equals(x, y) for y in b) for x in a)


def make_default_comparator(
    is_persistent: Callable[[Any], bool] = is_persistent_collection,
    deep_equal: Callable[[Any, Any], bool] = deep_equals,
) -> Comparator:
    """
    建立預設風格的比較器。

    兩邊都是持久化集合時使用 deep_equal，否則退回 simple_comparator。
    可藉此接上其他持久化集合庫，而不需要修改任何全域設定。

    Args:
        is_persistent: 判斷值是否為持久化集合的函數
        deep_equal: 持久化集合的結構比較函數

    Returns:
        新的比較器
    """
    def comparator(a: Any, b: Any) -> bool:
        if is_persistent(a) and is_persistent(b):
            return deep_equal(a, b)
        return simple_comparator(a, b)

    return comparator


def default_comparator(a: Any, b: Any) -> bool:
    """
    持久化集合以結構比較，其他值以 simple_comparator 比較。

    普通的 dict / list 只比較 reference；dict 與由它建立的 Map 不相等。
    """
    if is_persistent_collection(a) and is_persistent_collection(b):
        return deep_equals(a, b)
    return simple_comparator(a, b)


def _structural_equals(a: Any, b: Any) -> bool:
    if a is b:
        return True
    if isinstance(a, (dict, Map)) and isinstance(b, (dict, Map)):
        if len(a) != len(b):
            return False
        for key in a:
            if key not in b or not _structural_equals(a[key], b[key]):
                return False
        return True
    if type(a) != type(b):
        return False
    if isinstance(a, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(_structural_equals(x, y) for x, y in zip(a, b))
    return a == b


def structural_comparator(a: Any, b: Any) -> bool:
    """
    深度比較器，逐層比較 dict / Map / list / tuple 的內容。

    適合狀態使用普通容器、但每次都產生新物件的情況。None 仍然不等於任何值。
    """
    if a is None or b is None:
        return False
    return _structural_equals(a, b)


def array_equals(a: Optional[Sequence[Any]], b: Optional[Sequence[Any]],
                 comparator: Comparator) -> bool:
    """
    逐位置比較兩組參數。

    任一邊為 None 或長度不同時回傳 False。
    """
    if a is None or b is None or len(a) != len(b):
        return False
    return all(comparator(x, y) for x, y in zip(a, b))
