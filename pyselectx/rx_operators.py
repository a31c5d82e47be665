"""
reactivex 操作符。

讓選擇器可以直接套用在狀態流上，只有推導值改變時才往下游發出。
"""
from typing import Any, Callable

from reactivex import Observable, operators as ops

from .comparators import default_comparator
from .types import Comparator, Selector


def select(selector: Selector, props: Any = None, *extra: Any,
           comparator: Comparator = default_comparator) -> Callable[[Observable], Observable]:
    """
    將狀態流映射為選擇器的結果流。

    用法:
        state_subject.pipe(select(get_visible_todos, props)).subscribe(render)

    Args:
        selector: 任何選擇器，通常是 create_selector 建立的複合選擇器
        props: 傳給選擇器的 props
        *extra: 傳給選擇器的額外參數
        comparator: 判斷推導值是否改變的比較器

    Returns:
        可用於 Observable.pipe 的操作符
    """
    def _select(source: Observable) -> Observable:
        return source.pipe(
            ops.map(lambda state: selector(state, props, *extra)),
            # 只有推導值改變時才發出
            ops.distinct_until_changed(comparer=comparator),
        )

    return _select
