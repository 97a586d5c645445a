"""
基於 PyRedux 的 Action 定義模組。

此模組提供 Action 類別以及創建、綁定 Action 的功能。
Actions 是描述狀態變更意圖的不可變對象；任何帶有 "type" 鍵的
mapping（包括普通 dict）都可以被 dispatch。
"""
import functools
import inspect
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Union, overload

from immutables import Map

from .errors import ConfigurationError
from .immutable_utils import to_immutable
from .types import DispatchFunction


class Action(Mapping[str, Any]):
    """
    表示一個有類型、可選負載與任意附加欄位的動作。

    Action 本身就是一個不可變的 mapping，因此可以用 action["type"]
    或 action.type 讀取欄位。

    屬性:
        type: 動作的類型
        payload: 動作的負載數據（可選）
    """
    __slots__ = ("_fields",)

    def __init__(self, type: Any, payload: Any = None, **fields: Any) -> None:
        data: Dict[str, Any] = {"type": type}
        if payload is not None:
            data["payload"] = to_immutable(payload)
        for key, value in fields.items():
            data[key] = to_immutable(value)
        object.__setattr__(self, "_fields", Map(data))

    @property
    def type(self) -> Any:
        return self._fields["type"]

    @property
    def payload(self) -> Any:
        return self._fields.get("payload")

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Cannot modify immutable instance attribute '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Cannot delete immutable instance attribute '{name}'")

    def __reduce__(self):
        # 以欄位重建，copy 與 pickle 不經過 __setattr__
        return (_restore_action, (dict(self._fields),))

    def __hash__(self) -> int:
        return hash(self._fields)

    def __repr__(self) -> str:
        extra = "".join(
            f", {key}={value!r}" for key, value in self._fields.items() if key != "type"
        )
        return f"Action(type={self.type!r}{extra})"


def _restore_action(fields: Dict[str, Any]) -> Action:
    fields = dict(fields)
    return Action(fields.pop("type"), fields.pop("payload", None), **fields)


def is_plain_object(value: Any) -> bool:
    """判斷一個值能否作為 action 被 dispatch。"""
    return isinstance(value, Mapping)


def kind_of(value: Any) -> str:
    """返回用於錯誤訊息的簡短類型名稱。"""
    if value is None:
        return "None"
    if inspect.isroutine(value) or isinstance(value, functools.partial):
        return "function"
    return type(value).__name__


@overload
def create_action(action_type: str) -> Callable[..., Action]:
    ...


@overload
def create_action(action_type: str, prepare_fn: Callable[..., Any]) -> Callable[..., Action]:
    ...


def create_action(action_type: str, prepare_fn: Optional[Callable[..., Any]] = None) -> Callable[..., Action]:
    """
    創建一個 Action 生成器函數。

    Args:
        action_type: Action 的類型標識符
        prepare_fn: 可選的預處理函數，用於在創建 Action 前處理輸入參數

    Returns:
        一個可調用的函數，用於生成指定類型的 Action

    範例:
        >>> increment = create_action("[Counter] Increment")
        >>> increment()  # 返回 Action(type='[Counter] Increment')
        >>>
        >>> add = create_action("[Counter] Add", lambda amount: amount)
        >>> add(5)  # 返回 Action(type='[Counter] Add', payload=5)
    """
    def action_creator(*args: Any, **kwargs: Any) -> Action:
        if prepare_fn:
            return Action(action_type, prepare_fn(*args, **kwargs))
        elif len(args) == 1 and not kwargs:
            return Action(action_type, args[0])
        elif args or kwargs:
            payload: Dict[Union[int, str], Any] = dict(zip(range(len(args)), args))
            payload.update(kwargs)
            return Action(action_type, payload)

        # 無參數，無負載
        return Action(action_type)

    # 添加 type 屬性以便於識別
    action_creator.type = action_type  # type: ignore[attr-defined]

    return action_creator


def _bind_action_creator(action_creator: Callable[..., Any], dispatch: DispatchFunction) -> Callable[..., Any]:
    @functools.wraps(action_creator)
    def bound(*args: Any, **kwargs: Any) -> Any:
        return dispatch(action_creator(*args, **kwargs))
    return bound


def bind_action_creators(action_creators: Any, dispatch: DispatchFunction) -> Any:
    """
    將 action 生成器綁定到 dispatch，調用時直接分發產生的 action。

    Args:
        action_creators: 單一的 action 生成器，或名稱到生成器的 mapping
        dispatch: Store 的 dispatch 函數

    Returns:
        與輸入同形狀的函數或函數字典；mapping 中不可調用的值會被略過。
    """
    if callable(action_creators):
        return _bind_action_creator(action_creators, dispatch)

    if not isinstance(action_creators, Mapping):
        raise ConfigurationError(
            "bind_action_creators expected a mapping or a function, "
            f"but instead received: '{kind_of(action_creators)}'.",
            component="bind_action_creators",
        )

    return {
        key: _bind_action_creator(creator, dispatch)
        for key, creator in action_creators.items()
        if callable(creator)
    }
