"""
PyRedux：單一狀態樹、純函數 reducer 與可組合中介軟體的狀態容器。
"""
from .errors import (
    PyReduxError, ConfigurationError, StoreError, ReentrancyError,
    ActionError, ActionShapeError, ReducerError, ReducerContractError,
    ReducerShapeError, MiddlewareError, ReducerShapeDiagnostic,
    ErrorHandler, global_error_handler,
)
from .config import StoreConfig, get_config, configure, reset_config
from .action_types import ActionTypes
from .actions import Action, create_action, bind_action_creators, is_plain_object
from .compose import compose
from .reducers import combine_reducers, create_reducer, on
from .store import Store, create_store
from .middleware import (
    MiddlewareAPI, apply_middleware, BaseMiddleware, LoggerMiddleware, ThunkMiddleware,
)
from .immutable_utils import to_immutable, to_dict

__version__ = "0.1.0"

__all__ = [
    # Errors
    "PyReduxError", "ConfigurationError", "StoreError", "ReentrancyError",
    "ActionError", "ActionShapeError", "ReducerError", "ReducerContractError",
    "ReducerShapeError", "MiddlewareError", "ReducerShapeDiagnostic",
    "ErrorHandler", "global_error_handler",

    # Config
    "StoreConfig", "get_config", "configure", "reset_config",

    # Actions
    "ActionTypes", "Action", "create_action", "bind_action_creators", "is_plain_object",

    # Composition
    "compose",

    # Reducers
    "combine_reducers", "create_reducer", "on",

    # Store
    "Store", "create_store",

    # Middleware
    "MiddlewareAPI", "apply_middleware", "BaseMiddleware", "LoggerMiddleware",
    "ThunkMiddleware",

    # Immutable Utils
    "to_immutable", "to_dict",
]
