"""
PySelectX 錯誤處理模組。

定義函式庫自身會拋出的異常類型，以及集中式的錯誤處理器。
使用者提供的選擇器或組合函數所拋出的異常不在此列，它們會原樣傳遞給呼叫者。
"""
import functools
import json
import logging
import time
import traceback
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

logger = logging.getLogger("pyselectx")

T = TypeVar("T")


class PySelectXError(Exception):
    """所有 PySelectX 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.traceback = "".join(traceback.format_stack()[:-1])

    def to_dict(self) -> Dict[str, Any]:
        """將錯誤轉為可序列化的字典。"""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "details": {k: repr(v) for k, v in self.details.items()},
        }

    def __str__(self) -> str:
        return f"PySelectX encountered error: {self.message}"


class SelectorError(PySelectXError):
    """與 Selector 相關的錯誤。"""

    def __init__(self, message: str, selector_name: Optional[str] = None,
                 input_state: Any = None, **kwargs: Any):
        details = {"selector_name": selector_name, "input_state": input_state}
        details.update(kwargs)
        super().__init__(message, details)
        self.selector_name = selector_name


class ConfigurationError(PySelectXError):
    """配置相關的錯誤，例如建立選擇器時沒有提供任何函數。"""

    def __init__(self, message: str, component: str,
                 config_key: Optional[str] = None, **kwargs: Any):
        details = {"component": component, "config_key": config_key}
        details.update(kwargs)
        super().__init__(message, details)
        self.component = component
        self.config_key = config_key


class ErrorHandler:
    """集中式錯誤處理器，用於日誌記錄和錯誤報告。"""

    def __init__(self, log_to_console: bool = True, log_to_file: bool = False,
                 log_file: Optional[str] = None):
        """
        Args:
            log_to_console: 是否寫入 pyselectx logger
            log_to_file: 是否以 JSON lines 追加寫入 log_file
            log_file: 錯誤日誌檔案路徑
        """
        if log_to_file and not log_file:
            raise ConfigurationError(
                "log_file is required when log_to_file is enabled",
                component="ErrorHandler", config_key="log_file",
            )
        self.log_to_console = log_to_console
        self.log_to_file = log_to_file
        self.log_file = log_file
        self.handlers: List[Callable[[PySelectXError], None]] = []

    def register_handler(self, handler: Callable[[PySelectXError], None]) -> None:
        """註冊額外的錯誤回呼，例如上報到外部服務。"""
        self.handlers.append(handler)

    def handle(self, error: Union[PySelectXError, Exception]) -> None:
        """
        記錄錯誤並通知所有已註冊的回呼。

        非 PySelectXError 的異常會先包裝成 PySelectXError 再分發。
        """
        if not isinstance(error, PySelectXError):
            error = PySelectXError(str(error), {"original_type": type(error).__name__})

        if self.log_to_console:
            logger.error("%s %s", type(error).__name__, error, extra={"details": error.details})

        if self.log_to_file:
            record = dict(error.to_dict(), timestamp=time.time())
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(record, ensure_ascii=False) + "\n")

        for handler in self.handlers:
            handler(error)


# 單例錯誤處理器
global_error_handler = ErrorHandler()


def handle_error(func: Callable[..., T]) -> Callable[..., T]:
    """
    裝飾器：將 func 拋出的 PySelectXError 交給 global_error_handler 記錄後重新拋出。

    其他異常不做任何處理，直接往上傳遞。
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return func(*args, **kwargs)
        except PySelectXError as err:
            global_error_handler.handle(err)
            raise
    return wrapper
