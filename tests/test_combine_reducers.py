"""Tests for combine_reducers."""

import pytest

from pyredux import (
    ActionTypes,
    ReducerContractError,
    ReducerShapeDiagnostic,
    ReducerShapeError,
    combine_reducers,
    configure,
    create_store,
)

from helpers import counter, todos


def identity(state=None, action=None):
    return {} if state is None else state


class TestCombination:
    def test_builds_state_from_slices(self):
        reducer = combine_reducers({"counter": counter, "todos": todos})
        state = reducer(None, {"type": "INC"})
        assert state == {"counter": 1, "todos": ()}

    def test_noop_dispatch_keeps_state_identity(self):
        store = create_store(combine_reducers({"a": identity, "b": identity}))
        before = store.get_state()
        store.dispatch({"type": "NOOP"})
        assert store.get_state() is before

    def test_identity_slices_return_same_reference(self):
        reducer = combine_reducers({"a": identity, "b": identity})
        state = {"a": {"x": 1}, "b": {"y": 2}}
        assert reducer(state, {"type": "ANYTHING"}) is state

    def test_changed_slice_produces_new_mapping(self):
        reducer = combine_reducers({"counter": counter, "todos": todos})
        state = reducer(None, {"type": "NOOP"})
        next_state = reducer(state, {"type": "INC"})
        assert next_state is not state
        assert next_state["counter"] == 1
        assert next_state["todos"] is state["todos"]

    def test_filters_non_callable_values(self):
        reducer = combine_reducers({"counter": counter, "broken": "not a reducer"})
        assert reducer(None, {"type": "INC"}) == {"counter": 1}

    def test_drops_unknown_keys(self, diagnostics):
        reducer = combine_reducers({"counter": counter})
        state = reducer({"counter": 3, "stale": True}, {"type": "NOOP"})
        assert state == {"counter": 3}

    def test_slice_returning_none_names_key_and_action(self):
        def picky(state=None, action=None):
            if action["type"] == "BAD":
                return None
            return 0 if state is None else state

        store = create_store(combine_reducers({"counter": counter, "picky": picky}))
        with pytest.raises(ReducerContractError) as excinfo:
            store.dispatch({"type": "BAD"})

        message = str(excinfo.value)
        assert '"picky"' in message
        assert '"BAD"' in message
        assert excinfo.value.reducer_name == "picky"
        assert excinfo.value.action_type == "BAD"

    def test_exposes_final_reducers(self):
        reducer = combine_reducers({"counter": counter, "missing": None})
        assert reducer.reducers == {"counter": counter}
        assert reducer.shape_error is None


class TestShapeAssertion:
    def test_init_returning_none_is_deferred_to_first_call(self):
        def lazy(state=None, action=None):
            return state

        reducer = combine_reducers({"lazy": lazy})
        assert isinstance(reducer.shape_error, ReducerShapeError)
        assert reducer.shape_error.reducer_name == "lazy"

        with pytest.raises(ReducerShapeError, match="during initialization") as first:
            reducer(None, {"type": "ANY"})
        with pytest.raises(ReducerShapeError) as second:
            reducer({}, {"type": "ANY"})
        assert first.value is second.value is reducer.shape_error

    def test_store_construction_fails(self):
        def lazy(state=None, action=None):
            return state

        with pytest.raises(ReducerShapeError, match='"lazy"'):
            create_store(combine_reducers({"counter": counter, "lazy": lazy}))

    def test_probe_catches_reducers_handling_private_types(self):
        def sneaky(state=None, action=None):
            if action["type"] == ActionTypes.INIT:
                return 0
            return state

        reducer = combine_reducers({"sneaky": sneaky})
        with pytest.raises(ReducerShapeError, match="probed with a random type"):
            reducer(None, {"type": "ANY"})

    def test_probe_types_are_fresh_and_private(self):
        seen = []

        def recording(state=None, action=None):
            seen.append(action["type"])
            return 0

        combine_reducers({"a": recording})
        combine_reducers({"a": recording})

        init_one, probe_one, init_two, probe_two = seen
        assert init_one == init_two == ActionTypes.INIT
        assert probe_one != probe_two
        assert probe_one.startswith("@@pyredux/PROBE_UNKNOWN_ACTION")

    def test_probe_exceptions_are_deferred(self):
        def exploding(state=None, action=None):
            raise KeyError("boom")

        reducer = combine_reducers({"exploding": exploding})
        with pytest.raises(KeyError):
            reducer(None, {"type": "ANY"})


class TestDiagnostics:
    def test_warns_about_missing_reducer(self, diagnostics):
        combine_reducers({"counter": counter, "todos": None})
        assert len(diagnostics) == 1
        assert isinstance(diagnostics[0], ReducerShapeDiagnostic)
        assert diagnostics[0].message == 'No reducer provided for key "todos"'

    def test_warns_about_unexpected_preloaded_keys_once(self, diagnostics):
        store = create_store(
            combine_reducers({"counter": counter}),
            {"counter": 1, "extra": True},
        )
        assert len(diagnostics) == 1
        message = diagnostics[0].message
        assert 'Unexpected key "extra"' in message
        assert "preloaded_state argument passed to create_store" in message

        store.dispatch({"type": "INC"})
        assert len(diagnostics) == 1

    def test_warns_about_unexpected_keys_in_previous_state(self, diagnostics):
        reducer = combine_reducers({"counter": counter})
        reducer({"counter": 1, "a": 1, "b": 2}, {"type": "NOOP"})
        assert len(diagnostics) == 1
        message = diagnostics[0].message
        assert 'Unexpected keys "a", "b"' in message
        assert "previous state received by the reducer" in message

    def test_replace_suppresses_unexpected_key_warning(self, diagnostics):
        reducer = combine_reducers({"counter": counter})
        reducer({"counter": 1, "removed": 2}, {"type": ActionTypes.REPLACE})
        assert diagnostics == []

    def test_warns_about_non_mapping_state(self, diagnostics):
        reducer = combine_reducers({"counter": counter})
        assert reducer(7, {"type": "NOOP"}) == {"counter": 0}
        assert 'unexpected type of "int"' in diagnostics[0].message

    def test_warns_about_empty_reducer_map(self, diagnostics):
        reducer = combine_reducers({})
        state = {}
        assert reducer(state, {"type": "NOOP"}) is state
        assert "does not have a valid reducer" in diagnostics[0].message

    def test_production_is_silent(self, diagnostics):
        configure(env="production")
        reducer = combine_reducers({"counter": counter, "todos": None})
        reducer({"counter": 1, "extra": True}, {"type": "NOOP"})
        assert diagnostics == []

    def test_diagnostics_are_logged(self, caplog):
        with caplog.at_level("WARNING", logger="pyredux.errors"):
            combine_reducers({"todos": None})
        assert 'No reducer provided for key "todos"' in caplog.text
