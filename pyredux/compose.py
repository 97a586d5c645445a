import functools
from typing import Any, Callable


def compose(*funcs: Callable[..., Any]) -> Callable[..., Any]:
    """
    由右至左組合單參數函數。

    最右邊的函數可以接收任意參數，其餘函數只接收前一個函數的返回值。
    compose(f, g, h) 等同於 lambda *args: f(g(h(*args)))。

    Args:
        *funcs: 要組合的函數

    Returns:
        組合後的函數；沒有函數時返回恆等函數，只有一個時原樣返回。
    """
    if not funcs:
        return lambda arg: arg

    if len(funcs) == 1:
        return funcs[0]

    return functools.reduce(
        lambda f, g: lambda *args, **kwargs: f(g(*args, **kwargs)), funcs
    )
