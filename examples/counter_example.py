"""
PyRedux 範例：計數器與待辦事項，展示 combine_reducers、中介軟體與 reactivex 觀察。
"""
import logging

from pyredux import (
    LoggerMiddleware,
    ThunkMiddleware,
    apply_middleware,
    bind_action_creators,
    combine_reducers,
    create_action,
    create_reducer,
    create_store,
    on,
)

logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

# ====== Actions ======
increment = create_action("[Counter] Increment")
increment_by = create_action("[Counter] IncrementBy", lambda amount: amount)
add_todo = create_action("[Todos] Add", lambda text: text)

# ====== Reducers ======
counter_reducer = create_reducer(
    0,
    on(increment, lambda state, action: state + 1),
    on(increment_by, lambda state, action: state + action.payload),
)

todos_reducer = create_reducer(
    (),
    on(add_todo, lambda state, action: state + (action.payload,)),
)

root_reducer = combine_reducers({
    "counter": counter_reducer,
    "todos": todos_reducer,
})


# ====== Thunks ======
def increment_if_odd():
    def thunk(dispatch, get_state):
        if get_state()["counter"] % 2:
            dispatch(increment())
    return thunk


if __name__ == "__main__":
    store = create_store(root_reducer, apply_middleware(ThunkMiddleware, LoggerMiddleware))

    store.select(lambda state: state["todos"]).subscribe(
        lambda todos: print(f"todos changed: {todos}")
    )
    unsubscribe = store.subscribe(lambda: print(f"state: {store.get_state()}"))

    actions = bind_action_creators(
        {"increment": increment, "increment_by": increment_by, "add_todo": add_todo},
        store.dispatch,
    )
    actions["increment"]()
    actions["increment_by"](2)
    store.dispatch(increment_if_odd())
    actions["add_todo"]("write docs")

    unsubscribe()
    store.dispatch(increment())
    print(f"final state: {store.get_state()}")
