"""
PyRedux 錯誤處理模組。

定義 Store、Reducer、Action 與 Middleware 相關的異常類型，
以及集中式的錯誤處理器，用於記錄與轉發非致命的診斷訊息。
"""
import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class PyReduxError(Exception):
    """所有 PyRedux 異常的基礎類。"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        將異常轉換為可序列化的字典。

        Returns:
            包含錯誤類型、訊息與細節的字典。
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
        }

    def __str__(self) -> str:
        return self.message


class ConfigurationError(PyReduxError):
    """配置或建構參數錯誤，例如傳入多個 enhancer 或非 callable 的 reducer。"""

    def __init__(self, message: str, component: str, config_key: Optional[str] = None, **kwargs: Any) -> None:
        details = {"component": component, **kwargs}
        if config_key is not None:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.component = component
        self.config_key = config_key


class StoreError(PyReduxError):
    """與 Store 相關的錯誤。"""

    def __init__(self, message: str, operation: str, **kwargs: Any) -> None:
        super().__init__(message, {"operation": operation, **kwargs})
        self.operation = operation


class ReentrancyError(StoreError):
    """在 dispatch 執行期間調用了被禁止的 Store 操作。"""


class ActionError(PyReduxError):
    """與 Action 相關的錯誤。"""

    def __init__(self, message: str, action_type: Any = None, **kwargs: Any) -> None:
        super().__init__(message, {"action_type": action_type, **kwargs})
        self.action_type = action_type


class ActionShapeError(ActionError):
    """被 dispatch 的值不是 mapping，或缺少有效的 type。"""


class ReducerError(PyReduxError):
    """與 Reducer 相關的錯誤。"""

    def __init__(self, message: str, reducer_name: Optional[str] = None, action_type: Any = None, **kwargs: Any) -> None:
        super().__init__(
            message,
            {"reducer_name": reducer_name, "action_type": action_type, **kwargs},
        )
        self.reducer_name = reducer_name
        self.action_type = action_type


class ReducerContractError(ReducerError):
    """Reducer 對某個 (state, action) 返回了 None。"""


class ReducerShapeError(ReducerError):
    """combine_reducers 在建構時探測 slice reducer 失敗。"""


class MiddlewareError(PyReduxError):
    """與 Middleware 相關的錯誤。"""

    def __init__(self, message: str, middleware_name: Optional[str] = None, action_type: Any = None, **kwargs: Any) -> None:
        super().__init__(
            message,
            {"middleware_name": middleware_name, "action_type": action_type, **kwargs},
        )
        self.middleware_name = middleware_name
        self.action_type = action_type


class ReducerShapeDiagnostic(PyReduxError):
    """
    非致命的狀態形狀診斷。

    只會經由 ErrorHandler 傳遞，永遠不會被拋出，也不影響控制流程。
    """


class ErrorHandler:
    """集中式錯誤處理器，用於日誌記錄和轉發錯誤報告。"""

    def __init__(self, log_to_console: bool = True) -> None:
        self.log_to_console = log_to_console
        self.handlers: List[Callable[[PyReduxError], None]] = []

    def register_handler(self, handler: Callable[[PyReduxError], None]) -> None:
        """
        註冊一個錯誤處理回調。

        Args:
            handler: 接收 PyReduxError 的函數。
        """
        if handler not in self.handlers:
            self.handlers.append(handler)

    def unregister_handler(self, handler: Callable[[PyReduxError], None]) -> None:
        """移除已註冊的回調，未註冊時不做任何事。"""
        if handler in self.handlers:
            self.handlers.remove(handler)

    def handle(self, error: PyReduxError) -> None:
        """
        記錄錯誤並依序通知所有已註冊的處理器。

        Args:
            error: 要處理的錯誤或診斷。
        """
        if self.log_to_console:
            if isinstance(error, ReducerShapeDiagnostic):
                logger.warning(error.message)
            else:
                logger.error("%s: %s", error.__class__.__name__, error.message)
        for handler in list(self.handlers):
            handler(error)


# 單例錯誤處理器
global_error_handler = ErrorHandler()
