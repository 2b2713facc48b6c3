"""End-to-end flows combining chains, decoration, propagation and outcomes."""

import json

import pytest

from errhandling import (
    Boundary,
    ChainedError,
    Outcome,
    Slot,
    Unrecoverable,
    boundary,
    ensure_no_error,
    must,
    on_error,
    propagate,
    with_cause,
)

ROOT_ERROR = "some error occurred"


def function_no_err():
    return "", None


def function_err():
    return "", ValueError(ROOT_ERROR)


def test_with_cause_returns_chained_error():
    """A decorated foreign error reaches the boundary as a structured chain."""
    err_msg = "oopsies"

    @boundary(with_value=False)
    def run():
        propagate(*with_cause(*function_err())(err_msg))
        return None

    err = run()

    assert isinstance(err, ChainedError)
    assert err.full_report() == (
        "error:\n\t" + err_msg
        + "\n\nRoot cause:\n\t" + ROOT_ERROR
        + "\n\nFull error trace:\n\t" + err_msg
        + "\n\tcaused by: " + ROOT_ERROR
    )


def test_no_error_path_runs_to_completion():
    @boundary
    def run():
        value = ensure_no_error(*with_cause(*function_no_err())("unused"))
        return value + "done", None

    assert run() == ("done", None)


class FakeStore:
    """In-memory key/value store returning ``(value, error)`` pairs."""

    def __init__(self, data):
        self.data = data

    def read(self, key):
        if key not in self.data:
            return None, KeyError(key)
        return self.data[key], None


def _parse(raw):
    return Outcome.capture(json.loads, raw).with_cause("invalid JSON document")


def _load_document(store, key):
    raw = ensure_no_error(*store.read(key), f"could not read {key!r}")
    return _parse(raw).unwrap()


def _load_settings(store):
    settings = _load_document(store, "settings")
    port = settings.get("port")
    if not isinstance(port, int):
        ensure_no_error(settings, ValueError(f"port must be an integer, got {port!r}"), "invalid settings")
    return settings


@boundary
def load_service(store):
    settings = _load_settings(store)
    return {"port": settings["port"]}, None


class TestServiceLoading:
    """A three-level call stack failing at different depths."""

    def test_success(self):
        store = FakeStore({"settings": '{"port": 8080}'})
        assert load_service(store) == ({"port": 8080}, None)

    def test_missing_key(self):
        value, err = load_service(FakeStore({}))

        assert value is None
        assert err.short_form() == "'settings' -> could not read 'settings'"
        assert err.root_message == "'settings'"

    def test_invalid_json(self):
        value, err = load_service(FakeStore({"settings": "{not json"}))

        assert value is None
        assert err.message == "invalid JSON document"
        assert err.root_message.startswith("Expecting property name")

    def test_invalid_port_carries_partial_value(self):
        value, err = load_service(FakeStore({"settings": '{"port": "http"}'}))

        assert value == {"port": "http"}
        assert err.full_report().splitlines() == [
            "error:",
            "\tinvalid settings",
            "",
            "Root cause:",
            "\tport must be an integer, got 'http'",
            "",
            "Full error trace:",
            "\tinvalid settings",
            "\tcaused by: port must be an integer, got 'http'",
        ]


def test_outermost_boundary_stringifies_once():
    """Inner boundaries forward structured chains for further wrapping."""
    reports = []

    @boundary
    def inner():
        ensure_no_error(None, ConnectionError("connection reset"), "fetch failed")

    def outer():
        err_out = Slot()
        with Boundary(err_out):
            _, err = inner()
            ensure_no_error(None, err, "sync failed")
        on_error(None, err_out.value, lambda e: reports.append(e.full_report()))
        return err_out.value

    err = outer()

    assert err.short_form() == "connection reset -> fetch failed -> sync failed"
    assert reports == [err.full_report()]
    assert reports[0].count("caused by:") == 2


def test_must_during_setup(quiet_termination):
    with pytest.raises(Unrecoverable) as exc_info:
        must(*FakeStore({}).read("database_url"))

    assert exc_info.value.error.message == "'database_url'"
