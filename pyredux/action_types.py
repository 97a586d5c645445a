"""
PyRedux 保留的私有 action 類型。

對於任何未知的 action，reducer 必須返回目前的狀態；
若目前狀態為 None，則必須返回初始狀態。
不要在程式碼中直接引用這些 action 類型。
"""
import uuid


def _random_string() -> str:
    return ".".join(uuid.uuid4().hex[:6])


class ActionTypes:
    INIT = f"@@pyredux/INIT{_random_string()}"
    REPLACE = f"@@pyredux/REPLACE{_random_string()}"

    @staticmethod
    def probe_unknown_action() -> str:
        """每次調用都產生一個新的、無法預測的探測類型。"""
        return f"@@pyredux/PROBE_UNKNOWN_ACTION{_random_string()}"
