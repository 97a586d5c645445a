import contextlib
import logging
import operator
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

import reactivex
from reactivex import Observable, operators as ops
from reactivex.abc import ObserverBase, SchedulerBase
from reactivex.disposable import Disposable

from .action_types import ActionTypes
from .actions import Action, is_plain_object, kind_of
from .errors import (
    ActionShapeError,
    ConfigurationError,
    ReducerContractError,
    ReentrancyError,
)
from .types import Enhancer, Listener, Reducer

logger = logging.getLogger(__name__)

S = TypeVar("S")


class Store(Generic[S]):
    """
    狀態容器，持有唯一的狀態樹，只能透過 dispatch 改變狀態，
    並在每次狀態轉換後通知訂閱者。

    一個應用應該只有一個 Store。若要讓狀態樹的不同部分回應 action，
    請使用 combine_reducers 將多個 reducer 組合成一個。
    """

    def __init__(self, reducer: Reducer[S], preloaded_state: Optional[S] = None):
        """
        初始化 Store，並立即分發私有的 INIT action，讓每個 reducer 提供初始狀態。

        Args:
            reducer: 根 reducer，給定目前狀態與 action，返回下一個狀態。
            preloaded_state: 可選的初始狀態。
        """
        if not callable(reducer):
            raise ConfigurationError(
                f"Expected the root reducer to be a function. Instead, received: '{kind_of(reducer)}'",
                component="store",
                config_key="reducer",
            )

        self._current_reducer = reducer
        self._current_state = preloaded_state
        # 當前訂閱者列表
        self._current_listeners: List[Listener] = []
        # 下一次 dispatch 的訂閱者快照，需要修改時才從當前列表複製
        self._next_listeners = self._current_listeners
        self._is_dispatching = False

        logger.debug("store created with reducer %r", reducer)
        self._dispatch_core(Action(ActionTypes.INIT))

    def _ensure_can_mutate_next_listeners(self) -> None:
        if self._next_listeners is self._current_listeners:
            self._next_listeners = list(self._current_listeners)

    @contextlib.contextmanager
    def _dispatching(self) -> Iterator[None]:
        self._is_dispatching = True
        try:
            yield
        finally:
            self._is_dispatching = False

    def get_state(self) -> S:
        """
        讀取目前的狀態樹。

        Returns:
            目前的狀態。
        """
        if self._is_dispatching:
            raise ReentrancyError(
                "You may not call store.get_state() while the reducer is executing. "
                "The reducer has already received the state as an argument. "
                "Pass it down from the top reducer instead of reading it from the store.",
                operation="get_state",
            )
        return self._current_state

    @property
    def state(self) -> S:
        return self.get_state()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        註冊一個變更監聽器，每次 dispatch 完成後都會被無參數調用。

        在 dispatch 進行中（例如在監聽器內）新增或移除監聽器，
        不會影響這一次的通知，只會在下一次 dispatch 生效。

        Args:
            listener: 每次 dispatch 後調用的回調。

        Returns:
            移除該監聽器的函數，重複調用不會有任何效果。
        """
        if not callable(listener):
            raise ConfigurationError(
                f"Expected the listener to be a function. Instead, received: '{kind_of(listener)}'",
                component="store",
                config_key="listener",
            )

        if self._is_dispatching:
            raise ReentrancyError(
                "You may not call store.subscribe() while the reducer is executing. "
                "If you would like to be notified after the store has been updated, "
                "subscribe from a component and invoke store.get_state() in the callback "
                "to access the latest state.",
                operation="subscribe",
            )

        is_subscribed = True

        self._ensure_can_mutate_next_listeners()
        self._next_listeners.append(listener)

        def unsubscribe() -> None:
            nonlocal is_subscribed
            if not is_subscribed:
                return

            if self._is_dispatching:
                raise ReentrancyError(
                    "You may not unsubscribe from a store listener while the reducer is executing.",
                    operation="unsubscribe",
                )

            is_subscribed = False

            self._ensure_can_mutate_next_listeners()
            self._next_listeners.remove(listener)

        return unsubscribe

    def _dispatch_core(self, action: Any) -> Any:
        if not is_plain_object(action):
            hint = ""
            if callable(action):
                hint = " You may need to add ThunkMiddleware to your store setup to handle dispatching functions."
            raise ActionShapeError(
                f"Actions must be mappings. Instead, the actual type was: '{kind_of(action)}'.{hint}",
            )

        action_type = action.get("type")
        if action_type is None:
            raise ActionShapeError(
                'Actions may not have an undefined "type" property. '
                "You may have misspelled an action type string constant.",
            )

        if self._is_dispatching:
            raise ReentrancyError("Reducers may not dispatch actions.", operation="dispatch", action_type=action_type)

        with self._dispatching():
            next_state = self._current_reducer(self._current_state, action)
            if next_state is None:
                raise ReducerContractError(
                    f'When called with an action of type "{action_type}", the reducer returned None. '
                    "To ignore an action, you must explicitly return the previous state.",
                    action_type=action_type,
                )
            self._current_state = next_state

        logger.debug("dispatched %r", action_type)

        listeners = self._current_listeners = self._next_listeners
        for listener in listeners:
            listener()

        return action

    def dispatch(self, action: Any) -> Any:
        """
        分發一個 action，這是改變狀態的唯一方式。

        Reducer 會以目前狀態和 action 被調用，其返回值成為下一個狀態，
        然後通知所有監聽器。

        Args:
            action: 帶有 "type" 鍵的 mapping。

        Returns:
            傳入的 action。
        """
        return self._dispatch_core(action)

    def replace_reducer(self, next_reducer: Reducer[S]) -> None:
        """
        替換目前使用的 reducer，並分發私有的 REPLACE action。

        Args:
            next_reducer: 新的 reducer。
        """
        if not callable(next_reducer):
            raise ConfigurationError(
                f"Expected the next_reducer to be a function. Instead, received: '{kind_of(next_reducer)}'",
                component="store",
                config_key="next_reducer",
            )

        self._current_reducer = next_reducer
        logger.debug("reducer replaced with %r", next_reducer)
        self._dispatch_core(Action(ActionTypes.REPLACE))

    def observable(self) -> Observable:
        """
        以 reactivex Observable 的形式觀察狀態。

        訂閱時立即推送目前狀態，之後每次 dispatch 都再推送一次；
        dispose 訂閱即取消對 Store 的監聽。

        Returns:
            發送狀態的 Observable。
        """
        def subscribe(observer: ObserverBase[S], scheduler: Optional[SchedulerBase] = None) -> Disposable:
            def observe_state() -> None:
                observer.on_next(self.get_state())

            observe_state()
            return Disposable(self.subscribe(observe_state))

        return reactivex.create(subscribe)

    def select(self, selector: Optional[Callable[[S], Any]] = None) -> Observable:
        """
        選擇狀態的一部分進行觀察。

        Args:
            selector: 一個函數，接收整個狀態並返回希望觀察的部分。

        Returns:
            一個可觀察對象，只有選定部分的引用改變時才發出。
        """
        source = self.observable()
        if selector is not None:
            source = source.pipe(ops.map(selector))
        return source.pipe(ops.distinct_until_changed(comparer=operator.is_))


def create_store(
    reducer: Reducer[S],
    preloaded_state: Any = None,
    enhancer: Optional[Enhancer] = None,
    *extra: Any,
) -> Store[S]:
    """
    創建一個持有狀態樹的 Store。

    Args:
        reducer: 給定目前狀態與 action，返回下一個狀態的函數。
        preloaded_state: 可選的初始狀態；若使用 combine_reducers 產生根 reducer，
            它必須是與 reducer 鍵名相同形狀的 mapping。
        enhancer: 可選的 Store 增強器，例如 apply_middleware 的返回值。

    Returns:
        新創建的 Store 實例（或 enhancer 返回的 Store）。
    """
    if (callable(preloaded_state) and callable(enhancer)) or (
        callable(enhancer) and extra and callable(extra[0])
    ):
        raise ConfigurationError(
            "It looks like you are passing several store enhancers to create_store(). "
            "This is not supported. Instead, compose them together to a single function.",
            component="create_store",
            config_key="enhancer",
        )

    if callable(preloaded_state) and enhancer is None:
        enhancer = preloaded_state
        preloaded_state = None

    if enhancer is not None:
        if not callable(enhancer):
            raise ConfigurationError(
                f"Expected the enhancer to be a function. Instead, received: '{kind_of(enhancer)}'",
                component="create_store",
                config_key="enhancer",
            )
        return enhancer(create_store)(reducer, preloaded_state)

    return Store(reducer, preloaded_state)
