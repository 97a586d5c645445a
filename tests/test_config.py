"""Tests for configuration and the error handler."""

import pytest

from pyredux import (
    ConfigurationError,
    ErrorHandler,
    ReducerShapeDiagnostic,
    ReentrancyError,
    StoreConfig,
    combine_reducers,
    configure,
    get_config,
    reset_config,
)

from helpers import counter


class TestConfig:
    def test_defaults_to_development(self):
        config = get_config()
        assert config.env == "development"
        assert not config.production

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PYREDUX_ENV", "production")
        reset_config()
        assert get_config().production

    def test_configure_overrides(self):
        configure(env="production")
        assert get_config().production
        reset_config()
        assert not get_config().production

    def test_unknown_environment_is_not_production(self, monkeypatch):
        monkeypatch.setenv("PYREDUX_ENV", "staging")
        reset_config()
        config = get_config()
        assert config.env == "staging"
        assert not config.production

        reducer = combine_reducers({"counter": counter})
        assert reducer(None, {"type": "INC"}) == {"counter": 1}

    def test_invalid_value_type(self):
        with pytest.raises(ConfigurationError) as excinfo:
            configure(env=5)
        assert excinfo.value.config_key == "env"

    def test_config_is_frozen(self):
        with pytest.raises(Exception):
            get_config().env = "production"

    def test_model(self):
        assert StoreConfig(env="test").model_dump() == {"env": "test"}


class TestErrorHandler:
    def test_forwards_to_handlers(self):
        handler = ErrorHandler(log_to_console=False)
        received = []
        handler.register_handler(received.append)
        diagnostic = ReducerShapeDiagnostic("unexpected key")
        handler.handle(diagnostic)
        assert received == [diagnostic]

    def test_register_is_idempotent_and_unregister(self):
        handler = ErrorHandler(log_to_console=False)
        received = []
        handler.register_handler(received.append)
        handler.register_handler(received.append)
        handler.handle(ReducerShapeDiagnostic("once"))
        handler.unregister_handler(received.append)
        handler.handle(ReducerShapeDiagnostic("ignored"))
        assert [d.message for d in received] == ["once"]

    def test_logs_errors(self, caplog):
        handler = ErrorHandler()
        with caplog.at_level("ERROR", logger="pyredux.errors"):
            handler.handle(ReentrancyError("busy", operation="dispatch"))
        assert "ReentrancyError: busy" in caplog.text

    def test_error_to_dict(self):
        error = ReentrancyError("busy", operation="dispatch")
        assert error.to_dict() == {
            "error_type": "ReentrancyError",
            "message": "busy",
            "details": {"operation": "dispatch"},
        }
