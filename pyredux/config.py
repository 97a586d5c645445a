"""
PyRedux 執行期配置。

配置只有一個維度：執行環境。非 production 環境下，
combine_reducers 會經由 diagnostics 輸出狀態形狀的警告。
"""
import os
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigurationError

ENV_VAR = "PYREDUX_ENV"


class StoreConfig(BaseModel):
    """不可變的 PyRedux 配置。"""

    model_config = ConfigDict(frozen=True)

    env: str = "development"

    @property
    def production(self) -> bool:
        return self.env == "production"


# 全局配置實例（延遲初始化）
_config: Optional[StoreConfig] = None


def _build(**values: Any) -> StoreConfig:
    try:
        return StoreConfig(**values)
    except ValidationError as err:
        raise ConfigurationError(
            f"Invalid pyredux configuration: {err}",
            component="config",
            config_key=", ".join(str(e["loc"][0]) for e in err.errors() if e["loc"]),
        ) from err


def get_config() -> StoreConfig:
    """
    獲取目前的配置，首次調用時從環境變數讀取。

    Returns:
        StoreConfig 實例
    """
    global _config
    if _config is None:
        _config = _build(env=os.environ.get(ENV_VAR, "development"))
    return _config


def configure(**overrides: Any) -> StoreConfig:
    """
    以覆蓋值替換目前的配置。

    Args:
        **overrides: StoreConfig 的欄位值

    Returns:
        新的 StoreConfig 實例
    """
    global _config
    _config = _build(**{**get_config().model_dump(), **overrides})
    return _config


def reset_config() -> None:
    """
    重置配置（用於測試隔離），下一次 get_config() 會重新讀取環境變數。
    """
    global _config
    _config = None
