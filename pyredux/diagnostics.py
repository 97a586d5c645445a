"""開發期診斷訊息，production 環境下不輸出。"""
from typing import Any

from .config import get_config
from .errors import ReducerShapeDiagnostic, global_error_handler


def warning(message: str, **details: Any) -> None:
    """
    將非致命的診斷交給全局錯誤處理器。

    Args:
        message: 診斷訊息
        **details: 附加的結構化資訊
    """
    if get_config().production:
        return
    global_error_handler.handle(ReducerShapeDiagnostic(message, details))
