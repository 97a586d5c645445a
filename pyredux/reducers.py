from typing import Any, Dict, List, Mapping, Optional, TypeVar

from .action_types import ActionTypes
from .actions import Action, is_plain_object, kind_of
from .config import get_config
from .diagnostics import warning
from .errors import ReducerContractError, ReducerShapeError
from .types import ActionLike, Reducer

S = TypeVar("S")


def create_reducer(initial_state: S, *handlers) -> Reducer[S]:
    """
    創建一個 reducer 函式，用於處理狀態變更。

    Args:
        initial_state: 初始狀態，state 為 None 時返回。
        *handlers: 一系列 (action_type, handler_fn) 元組或使用 on 函式創建的處理器。

    Returns:
        一個 reducer 函式，根據 action 的類型執行對應的處理邏輯。
    """
    action_handlers = {}  # 儲存 action 類型與處理函式的對應關係

    for handler in handlers:
        if isinstance(handler, tuple) and len(handler) == 2:
            action_type, handler_fn = handler
            action_handlers[action_type] = handler_fn
        else:
            action_handlers.update(handler)

    def reducer(state: Optional[S] = None, action: Optional[ActionLike] = None) -> S:
        if state is None:
            state = initial_state
        if action is None:
            return state

        handler = action_handlers.get(action.get("type"))
        if handler:
            return handler(state, action)
        return state  # 沒有對應處理函式，返回原狀態

    reducer.initial_state = initial_state  # type: ignore[attr-defined]
    reducer.handlers = action_handlers  # type: ignore[attr-defined]

    return reducer


def on(action_creator_or_type, handler):
    """
    創建一個 action 類型與處理函式的映射。

    Args:
        action_creator_or_type: Action 創建器函式或 Action 類型。
        handler: 處理該 Action 的函式，接收 (state, action) 並返回新狀態。

    Returns:
        一個包含 {action_type: handler} 的字典。
    """
    if callable(action_creator_or_type) and hasattr(action_creator_or_type, "type"):
        action_type = action_creator_or_type.type
    else:
        action_type = action_creator_or_type

    return {action_type: handler}


def _get_unexpected_state_shape_warning_message(
    input_state: Any,
    reducers: Mapping[str, Reducer[Any]],
    action: Optional[ActionLike],
    unexpected_key_cache: set,
) -> Optional[str]:
    reducer_keys = list(reducers)
    action_type = action.get("type") if is_plain_object(action) else None
    argument_name = (
        "preloaded_state argument passed to create_store"
        if action_type == ActionTypes.INIT
        else "previous state received by the reducer"
    )

    if not reducer_keys:
        return (
            "Store does not have a valid reducer. Make sure the argument passed "
            "to combine_reducers is a mapping whose values are reducers."
        )

    if not is_plain_object(input_state):
        return (
            f'The {argument_name} has unexpected type of "{kind_of(input_state)}". '
            "Expected argument to be a mapping with the following keys: "
            + ", ".join(f'"{key}"' for key in reducer_keys)
        )

    unexpected_keys = [
        key for key in input_state
        if key not in reducers and key not in unexpected_key_cache
    ]
    unexpected_key_cache.update(unexpected_keys)

    if action_type == ActionTypes.REPLACE:
        return None

    if unexpected_keys:
        return (
            f"Unexpected {'keys' if len(unexpected_keys) > 1 else 'key'} "
            + ", ".join(f'"{key}"' for key in unexpected_keys)
            + f" found in {argument_name}. Expected to find one of the known reducer keys instead: "
            + ", ".join(f'"{key}"' for key in reducer_keys)
            + ". Unexpected keys will be ignored."
        )
    return None


def _assert_reducer_shape(reducers: Mapping[str, Reducer[Any]]) -> None:
    for key, reducer in reducers.items():
        initial_state = reducer(None, Action(ActionTypes.INIT))

        if initial_state is None:
            raise ReducerShapeError(
                f'The slice reducer for key "{key}" returned None during initialization. '
                "If the state passed to the reducer is None, you must explicitly return "
                "the initial state. The initial state may not be None.",
                reducer_name=key,
                action_type=ActionTypes.INIT,
            )

        probe_type = ActionTypes.probe_unknown_action()
        if reducer(None, Action(probe_type)) is None:
            raise ReducerShapeError(
                f'The slice reducer for key "{key}" returned None when probed with a random type. '
                f'Don\'t try to handle "{ActionTypes.INIT}" or other actions in the "@@pyredux/*" '
                "namespace. They are considered private. Instead, you must return the current "
                "state for any unknown actions, unless it is None, in which case you must "
                "return the initial state, regardless of the action type.",
                reducer_name=key,
                action_type=probe_type,
            )


def combine_reducers(reducers: Mapping[str, Optional[Reducer[Any]]]) -> Reducer[Dict[str, Any]]:
    """
    將多個 slice reducer 組合成一個 reducer。

    產生的 reducer 會以相同的鍵名調用每個 slice reducer，並把結果收集到
    一個 dict 中；若沒有任何 slice 改變（以引用比較），則返回原本的狀態對象。

    每個 slice reducer 都會在組合時被探測兩次（INIT 與一個隨機類型），
    任何一次返回 None 都會記錄為形狀錯誤，並在每次調用組合 reducer 時重新拋出。
    記錄下的錯誤也可從組合 reducer 的 shape_error 屬性讀取。

    Args:
        reducers: 鍵名到 slice reducer 的 mapping，不可調用的值會被忽略。

    Returns:
        組合後的 reducer。
    """
    production = get_config().production
    final_reducers: Dict[str, Reducer[Any]] = {}
    for key, reducer in reducers.items():
        if not production and reducer is None:
            warning(f'No reducer provided for key "{key}"', reducer_name=key)

        if callable(reducer):
            final_reducers[key] = reducer
    final_reducer_keys: List[str] = list(final_reducers)

    unexpected_key_cache: set = set()

    shape_assertion_error: Optional[Exception] = None
    try:
        _assert_reducer_shape(final_reducers)
    except Exception as err:  # 延遲到每次調用時重新拋出
        shape_assertion_error = err

    def combination(state: Optional[Mapping[str, Any]] = None, action: Optional[ActionLike] = None) -> Any:
        if shape_assertion_error is not None:
            raise shape_assertion_error

        if state is None:
            state = {}

        if not get_config().production:
            warning_message = _get_unexpected_state_shape_warning_message(
                state, final_reducers, action, unexpected_key_cache
            )
            if warning_message:
                warning(warning_message)

        is_mapping = is_plain_object(state)
        has_changed = False
        next_state: Dict[str, Any] = {}
        for key in final_reducer_keys:
            reducer = final_reducers[key]
            previous_state_for_key = state.get(key) if is_mapping else None
            next_state_for_key = reducer(previous_state_for_key, action)
            if next_state_for_key is None:
                action_type = action.get("type") if is_plain_object(action) else None
                described = f'"{action_type}"' if action_type is not None else "(unknown type)"
                raise ReducerContractError(
                    f"When called with an action of type {described}, the slice reducer for "
                    f'key "{key}" returned None. To ignore an action, you must explicitly '
                    "return the previous state.",
                    reducer_name=key,
                    action_type=action_type,
                )
            next_state[key] = next_state_for_key
            has_changed = has_changed or next_state_for_key is not previous_state_for_key

        has_changed = has_changed or len(final_reducer_keys) != (len(state) if is_mapping else 0)
        return next_state if has_changed else state

    combination.shape_error = shape_assertion_error  # type: ignore[attr-defined]
    combination.reducers = dict(final_reducers)  # type: ignore[attr-defined]
    return combination
