"""
選擇器建構模組。

create_selector 以若干依賴選擇器加上一個組合函數，建立經記憶化的複合選擇器。
只有當某個依賴選擇器取出的值 (依 comparator 判斷) 改變時，組合函數才會重新計算。
複合選擇器本身也可以作為其他選擇器的依賴，組成任意深度的選擇器圖。
"""
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from immutables import Map

from .comparators import default_comparator
from .errors import ConfigurationError, SelectorError, global_error_handler, handle_error
from .memoizers import default_memoizer
from .types import Comparator, Memoizer, Selector

__all__ = [
    "create_selector_builder",
    "create_selector",
    "create_structured_selector",
]


def _selector_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


@handle_error
def create_selector_builder(memoizer: Memoizer = default_memoizer,
                            comparator: Comparator = default_comparator) -> Callable[..., Selector]:
    """
    創建一個選擇器建構器。

    Args:
        memoizer: 包裝組合函數的記憶化工廠，簽名為 (fn, comparator) -> fn
        comparator: 判斷依賴值是否改變的比較器

    Returns:
        create(*selectors, result_fn=None)：最後一個參數為組合函數，其餘為依賴選擇器
    """
    if not callable(memoizer):
        raise ConfigurationError(
            f"memoizer must be callable, got {memoizer!r}",
            component="create_selector_builder", config_key="memoizer",
        )
    if not callable(comparator):
        raise ConfigurationError(
            f"comparator must be callable, got {comparator!r}",
            component="create_selector_builder", config_key="comparator",
        )

    @handle_error
    def create(*selectors: Selector, result_fn: Optional[Callable[..., Any]] = None) -> Selector:
        """
        創建一個複合選擇器。

        Args:
            *selectors: 依賴選擇器，最後一個為組合函數 (未提供 result_fn 時)
            result_fn: 組合函數，等同於把它放在 selectors 的最後

        Returns:
            只有一個選擇器時原樣返回；否則返回經記憶化的複合選擇器
        """
        if result_fn is not None:
            selectors = selectors + (result_fn,)

        if not selectors:
            raise ConfigurationError(
                "Expecting at least one selector.", component="create_selector",
            )

        for index, candidate in enumerate(selectors):
            if not callable(candidate):
                raise ConfigurationError(
                    f"Selector at position {index} is not callable: {candidate!r}",
                    component="create_selector",
                )

        *dependencies, combiner = selectors

        # 沒有依賴時不需要快取
        if not dependencies:
            return combiner

        dependencies = tuple(dependencies)
        memo = memoizer(combiner, comparator)
        evaluating = False

        def selector(state: Any, props: Any = None, *extra: Any) -> Any:
            nonlocal evaluating
            if evaluating:
                err = SelectorError(
                    "Cyclic selector graph: selector depends on itself.",
                    selector_name=_selector_name(combiner),
                    input_state=state,
                )
                global_error_handler.handle(err)
                raise err

            evaluating = True
            try:
                params = [dep(state, props, *extra) for dep in dependencies]
            finally:
                evaluating = False
            return memo(*params)

        def recomputations() -> int:
            counter = getattr(memo, "recomputations", None)
            return counter() if counter else 0

        def cache_info():
            info = getattr(memo, "cache_info", None)
            return info() if info else None

        def cache_clear() -> None:
            clear = getattr(memo, "cache_clear", None)
            if clear:
                clear()

        selector.__name__ = f"selector_of_{getattr(combiner, '__name__', 'combiner')}"
        selector.__qualname__ = selector.__name__
        selector.dependencies = dependencies  # type: ignore
        selector.result_fn = combiner  # type: ignore
        selector.memoized = memo  # type: ignore
        selector.recomputations = recomputations  # type: ignore
        selector.cache_info = cache_info  # type: ignore
        selector.cache_clear = cache_clear  # type: ignore
        return selector

    return create


# 預設的選擇器建構器：單槽記憶化 + default_comparator
create_selector = create_selector_builder()


def create_structured_selector(selectors: Mapping[str, Selector],
                               builder: Callable[..., Selector] = create_selector) -> Selector:
    """
    以鍵值對的方式組合選擇器，結果為相同鍵的 immutables.Map。

    用法:
        get_view = create_structured_selector({
            "count": get_count,
            "loading": get_loading,
        })
        get_view(state)  # Map({'count': ..., 'loading': ...})

    Args:
        selectors: 鍵到依賴選擇器的映射
        builder: 用於組合的選擇器建構器

    Returns:
        複合選擇器，任一成員改變時才產生新的 Map
    """
    if not isinstance(selectors, Mapping) or not selectors:
        raise ConfigurationError(
            "create_structured_selector expects a non-empty mapping of selectors.",
            component="create_structured_selector",
        )

    keys: Tuple[str, ...] = tuple(selectors.keys())

    def combine(*values: Any) -> Map:
        result: Dict[str, Any] = dict(zip(keys, values))
        return Map(result)

    return builder(*selectors.values(), result_fn=combine)
