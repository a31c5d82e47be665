"""
PySelectX 共用的類型定義。

集中放置 selector、comparator、memoizer 等類型別名，
讓各模組與 .pyi 存根文件引用同一組定義。
"""
from typing import Any, Callable, NamedTuple, TypeVar
from typing_extensions import Protocol, runtime_checkable

T = TypeVar("T")
R = TypeVar("R")
S = TypeVar("S")  # 狀態類型
P = TypeVar("P")  # props 類型

# 從 (state, props, *extra) 取出或推導出一個值
Selector = Callable[..., Any]
# 接收各依賴選擇器的結果並計算最終值
ResultFn = Callable[..., R]
# (previous, current) -> 是否視為未變更
Comparator = Callable[[Any, Any], bool]
# (fn, comparator) -> 經記憶化的 fn
Memoizer = Callable[[Callable[..., Any], Comparator], Callable[..., Any]]


@runtime_checkable
class SupportsDeepEquality(Protocol):
    """
    持久化集合的能力介面。

    任何值類型只要實作 deep_equals，就會被 default_comparator 以結構方式比較，
    不必依賴某個特定的集合庫。
    """

    def deep_equals(self, other: Any) -> bool: ...


class CacheInfo(NamedTuple):
    """記憶化函數的快取統計，欄位與 functools.lru_cache 一致。"""

    hits: int
    misses: int
    maxsize: Any
    currsize: int
