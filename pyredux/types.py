"""
PyRedux 共用的類型定義。
"""
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, TypeVar

from typing_extensions import TypedDict

if TYPE_CHECKING:
    from .middleware import MiddlewareAPI
    from .store import Store

S = TypeVar("S")

# 任何帶有 "type" 鍵的 mapping 都是合法的 action
ActionLike = Mapping[str, Any]

Reducer = Callable[[Optional[S], ActionLike], S]
Listener = Callable[[], None]
GetState = Callable[[], Any]
DispatchFunction = Callable[[Any], Any]
NextDispatch = DispatchFunction

MiddlewareFunction = Callable[[NextDispatch], DispatchFunction]
Middleware = Callable[["MiddlewareAPI"], MiddlewareFunction]

StoreCreator = Callable[..., "Store[Any]"]
Enhancer = Callable[[StoreCreator], StoreCreator]

ThunkFunction = Callable[[DispatchFunction, GetState], Any]


class ActionContext(TypedDict, total=False):
    """BaseMiddleware.action_context 在前後鉤子之間傳遞的資料。"""

    action: Any
    prev_state: Any
    next_state: Any
    result: Any
    error: Optional[BaseException]
    timestamp: Any
