"""
PySelectX：以依賴選擇器與組合函數建立記憶化推導值的函式庫。
"""
from .errors import (
    PySelectXError, SelectorError, ConfigurationError,
    ErrorHandler, global_error_handler, handle_error
)
from .comparators import (
    simple_comparator, default_comparator, structural_comparator,
    make_default_comparator, is_persistent_collection, deep_equals, array_equals
)
from .memoizers import default_memoizer, keyed_memoizer, create_cache_memoizer
from .store_selectors import create_selector, create_selector_builder, create_structured_selector
from .immutable_utils import to_immutable, to_dict
from .rx_operators import select
from .types import CacheInfo, SupportsDeepEquality

__version__ = "0.1.0"

# 匯出所有公開 API
__all__ = [
    # Errors
    "PySelectXError", "SelectorError", "ConfigurationError",
    "ErrorHandler", "global_error_handler", "handle_error",

    # Comparators
    "simple_comparator", "default_comparator", "structural_comparator",
    "make_default_comparator", "is_persistent_collection", "deep_equals", "array_equals",

    # Memoizers
    "default_memoizer", "keyed_memoizer", "create_cache_memoizer",

    # Selectors
    "create_selector", "create_selector_builder", "create_structured_selector",

    # Immutable Utils
    "to_immutable", "to_dict",

    # Rx Operators
    "select",

    # Types
    "CacheInfo", "SupportsDeepEquality",
]
