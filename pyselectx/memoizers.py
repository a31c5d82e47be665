"""
記憶化模組。

記憶化函數 (memoizer) 的簽名為 (fn, comparator) -> memoized_fn，
選擇器建構器以它包裝最後的組合函數。
"""
import functools
import logging
import time
from typing import Any, Callable, List, Optional, Tuple

from .comparators import array_equals, default_comparator
from .errors import ConfigurationError
from .types import CacheInfo, Comparator, Memoizer

logger = logging.getLogger("pyselectx.memoizers")

__all__ = ["default_memoizer", "keyed_memoizer", "create_cache_memoizer"]


def default_memoizer(fn: Callable[..., Any],
                     comparator: Comparator = default_comparator) -> Callable[..., Any]:
    """
    單一槽位的記憶化函數。

    只保留最近一次的參數與結果。當本次參數與上一次的參數長度相同，
    且每個位置都通過 comparator 時，直接返回快取結果而不呼叫 fn。

    fn 拋出異常時，快取維持呼叫前的內容，異常原樣往上拋。

    Args:
        fn: 要記憶化的函數
        comparator: 逐位置比較參數的比較器

    Returns:
        經過快取優化的函數，附帶 cache_info / cache_clear / recomputations
    """
    last_args: Optional[Tuple[Any, ...]] = None
    last_result: Any = None
    hits = 0
    misses = 0

    @functools.wraps(fn)
    def memoized(*args: Any) -> Any:
        nonlocal last_args, last_result, hits, misses

        if array_equals(args, last_args, comparator):
            hits += 1
            return last_result

        misses += 1
        logger.debug("cache miss on %s", getattr(fn, "__qualname__", fn))
        # 先計算，成功後才覆寫快取
        result = fn(*args)
        last_args = args
        last_result = result
        return result

    def cache_info() -> CacheInfo:
        return CacheInfo(hits, misses, 1, 0 if last_args is None else 1)

    def cache_clear() -> None:
        nonlocal last_args, last_result, hits, misses
        last_args = None
        last_result = None
        hits = misses = 0

    memoized.cache_info = cache_info  # type: ignore
    memoized.cache_clear = cache_clear  # type: ignore
    memoized.recomputations = lambda: misses  # type: ignore
    return memoized


def keyed_memoizer(fn: Callable[..., Any],
                   comparator: Optional[Comparator] = None) -> Callable[..., Any]:
    """
    以參數元組為鍵、保留完整歷史的記憶化函數。

    參數必須全部可雜湊。comparator 不會被使用，保留它只是為了符合 memoizer 的簽名。
    """
    cache = {}
    hits = 0
    misses = 0

    @functools.wraps(fn)
    def memoized(*args: Any) -> Any:
        nonlocal hits, misses
        if args in cache:
            hits += 1
            return cache[args]

        misses += 1
        logger.debug("cache miss on %s", getattr(fn, "__qualname__", fn))
        result = fn(*args)
        cache[args] = result
        return result

    def cache_info() -> CacheInfo:
        return CacheInfo(hits, misses, None, len(cache))

    def cache_clear() -> None:
        nonlocal hits, misses
        cache.clear()
        hits = misses = 0

    memoized.cache_info = cache_info  # type: ignore
    memoized.cache_clear = cache_clear  # type: ignore
    memoized.recomputations = lambda: misses  # type: ignore
    return memoized


def create_cache_memoizer(maxsize: int = 128, ttl: Optional[float] = None) -> Memoizer:
    """
    建立多條目的記憶化函數工廠，支援容量上限與 TTL 控制。

    每個條目以 comparator 比較參數，命中任一條目即返回其結果。

    Args:
        maxsize: 緩存的最大條目數，超過時淘汰最舊的條目
        ttl: 快取有效時間（秒），若超過此時間則重新計算，預設為無限

    Returns:
        可傳給 create_selector_builder 的 memoizer
    """
    if maxsize < 1:
        raise ConfigurationError(
            f"maxsize must be at least 1, got {maxsize}",
            component="create_cache_memoizer", config_key="maxsize",
        )
    if ttl is not None and ttl <= 0:
        raise ConfigurationError(
            f"ttl must be positive, got {ttl}",
            component="create_cache_memoizer", config_key="ttl",
        )

    def memoizer(fn: Callable[..., Any],
                 comparator: Comparator = default_comparator) -> Callable[..., Any]:
        # (timestamp, args, result)
        cache: List[Tuple[float, Tuple[Any, ...], Any]] = []
        hits = 0
        misses = 0

        @functools.wraps(fn)
        def memoized(*args: Any) -> Any:
            nonlocal cache, hits, misses
            now = time.monotonic()

            # 清除過期項
            if ttl is not None:
                cache = [item for item in cache if now - item[0] <= ttl]

            # 尋找緩存匹配
            for _, cached_args, cached_result in cache:
                if array_equals(args, cached_args, comparator):
                    hits += 1
                    return cached_result

            # 緩存未命中，計算新結果
            misses += 1
            logger.debug("cache miss on %s", getattr(fn, "__qualname__", fn))
            result = fn(*args)

            # 維護緩存大小
            while len(cache) >= maxsize:
                cache.pop(0)
            cache.append((now, args, result))
            return result

        def cache_info() -> CacheInfo:
            return CacheInfo(hits, misses, maxsize, len(cache))

        def cache_clear() -> None:
            nonlocal hits, misses
            cache.clear()
            hits = misses = 0

        memoized.cache_info = cache_info  # type: ignore
        memoized.cache_clear = cache_clear  # type: ignore
        memoized.recomputations = lambda: misses  # type: ignore
        return memoized

    return memoizer
