"""
基於 PyRedux 的中介軟體定義模組。

此模組提供 apply_middleware 增強器，以及數個內建的中介軟體，
用於在動作分發過程中插入自定義邏輯，例如日誌記錄與 thunk。

中介軟體的簽名為 middleware(api)(next_dispatch)(action)：
api 提供 get_state 與 dispatch，next_dispatch 是管線中的下一層。
"""

import contextlib
import datetime
import inspect
import logging
from typing import Any, Callable, Generator, Mapping, Optional, Union

from .compose import compose
from .errors import MiddlewareError
from .types import (
    ActionContext, DispatchFunction, Enhancer, GetState, MiddlewareFunction,
    NextDispatch, Reducer, StoreCreator,
)

logger = logging.getLogger(__name__)


class MiddlewareAPI:
    """
    提供給中介軟體的 Store 能力：讀取狀態與分發 action。

    dispatch 會在調用時轉發到當前綁定的 dispatch，因此中介軟體在建構時
    保存這個對象，之後仍能調用組裝完成的整條管線。
    """
    __slots__ = ("get_state", "dispatch")

    def __init__(self, get_state: GetState, dispatch: DispatchFunction) -> None:
        self.get_state = get_state
        self.dispatch = dispatch

    @property
    def state(self) -> Any:
        return self.get_state()


def apply_middleware(*middlewares: Any) -> Enhancer:
    """
    創建一個把中介軟體套用到 Store dispatch 上的增強器。

    第一個中介軟體位於最外層，最先看到每個 action；最後一個中介軟體
    最接近 reducer。中介軟體可以是函數、BaseMiddleware 實例或類別
    （類別會以無參數的方式實例化）。

    Args:
        *middlewares: 要套用的中介軟體。

    Returns:
        可傳給 create_store 的增強器。
    """
    def enhancer(create_store: StoreCreator) -> StoreCreator:
        def create(reducer: Reducer[Any], preloaded_state: Any = None):
            store = create_store(reducer, preloaded_state)

            def dispatch(*args: Any, **kwargs: Any) -> Any:
                raise MiddlewareError(
                    "Dispatching while constructing your middleware is not allowed. "
                    "Other middleware would not be applied to this dispatch."
                )

            # 轉發到當前綁定的 dispatch，而非建構時的佔位函數
            api = MiddlewareAPI(
                get_state=store.get_state,
                dispatch=lambda *args, **kwargs: dispatch(*args, **kwargs),
            )
            # 類別在每個 Store 建構時各自實例化
            instances = [m() if inspect.isclass(m) else m for m in middlewares]
            chain = [middleware(api) for middleware in instances]
            dispatch = compose(*chain)(store.dispatch)

            store.dispatch = dispatch
            logger.debug("applied %d middleware", len(chain))
            return store

        return create

    return enhancer


# ———— Base Middleware ————
class BaseMiddleware:
    """
    基礎中介類，定義所有中介可能實現的鉤子。

    中介軟體可以介入動作分發的流程，在動作到達 Reducer 前、
    動作處理完成後或出現錯誤時執行自定義邏輯。子類只需覆寫需要的鉤子；
    若要完全控制分發流程，可以覆寫 __call__。
    """

    def __call__(self, api: MiddlewareAPI) -> MiddlewareFunction:
        def middleware(next_dispatch: NextDispatch) -> DispatchFunction:
            def dispatch(action: Any) -> Any:
                with self.action_context(action, api.get_state()) as context:
                    context["result"] = next_dispatch(action)
                    context["next_state"] = api.get_state()
                    return context["result"]
            return dispatch
        return middleware

    def on_next(self, action: Any, prev_state: Any) -> None:
        """
        在 action 發送給 reducer 之前調用。

        Args:
            action: 正在 dispatch 的 Action
            prev_state: dispatch 之前的狀態
        """

    def on_complete(self, next_state: Any, action: Any) -> None:
        """
        在 reducer 處理完 action 之後調用。

        Args:
            next_state: dispatch 之後的最新狀態
            action: 剛剛 dispatch 的 Action
        """

    def on_error(self, error: Exception, action: Any) -> None:
        """
        如果 dispatch 過程中拋出異常，則調用此鉤子，異常仍會繼續拋出。

        Args:
            error: 拋出的異常
            action: 導致異常的 Action
        """

    @contextlib.contextmanager
    def action_context(self, action: Any, prev_state: Any) -> Generator[ActionContext, None, None]:
        """
        以上下文管理器處理 action 分發的生命週期。

        進入時調用 on_next；區塊正常結束且設置了 next_state 時調用 on_complete；
        區塊拋出異常時調用 on_error 並重新拋出。

        Yields:
            在上下文內外傳遞數據的字典
        """
        context: ActionContext = {
            'action': action,
            'prev_state': prev_state,
            'next_state': None,
            'result': None,
            'error': None,
            'timestamp': datetime.datetime.now(),
        }

        self.on_next(action, prev_state)

        try:
            yield context

            if context['next_state'] is not None:
                self.on_complete(context['next_state'], action)

        except Exception as err:
            context['error'] = err
            self.on_error(err, action)
            raise


def _action_type(action: Any) -> Any:
    if isinstance(action, Mapping):
        return action.get("type")
    return action


# ———— LoggerMiddleware ————
class LoggerMiddleware(BaseMiddleware):
    """
    日誌中介，記錄每個 action 發送前和發送後的 state。

    使用場景:
    - 偵錯時需要觀察每次 state 的變化。
    - 確保 action 的執行順序正確。
    """

    def __init__(self, level: int = logging.INFO, log: Optional[logging.Logger] = None) -> None:
        self.level = level
        self.log = log or logger

    def on_next(self, action: Any, prev_state: Any) -> None:
        self.log.log(self.level, "dispatching %s", _action_type(action))
        self.log.log(self.level, "state before %s: %r", _action_type(action), prev_state)

    def on_complete(self, next_state: Any, action: Any) -> None:
        self.log.log(self.level, "state after %s: %r", _action_type(action), next_state)

    def on_error(self, error: Exception, action: Any) -> None:
        self.log.error("error in %s: %s", _action_type(action), error)


# ———— ThunkMiddleware ————
class ThunkMiddleware(BaseMiddleware):
    """
    支援 dispatch 函數 (thunk)，可以在 thunk 內多次 dispatch 或讀取狀態。

    範例:
        ```python
        def add_if_odd(amount):
            def thunk(dispatch, get_state):
                if get_state()["counter"] % 2:
                    dispatch({"type": "ADD", "amount": amount})
            return thunk

        store.dispatch(add_if_odd(2))
        ```
    """

    def __call__(self, api: MiddlewareAPI) -> MiddlewareFunction:
        def middleware(next_dispatch: NextDispatch) -> DispatchFunction:
            def dispatch(action: Union[Callable[..., Any], Any]) -> Any:
                if callable(action):
                    return action(api.dispatch, api.get_state)
                return next_dispatch(action)
            return dispatch
        return middleware
