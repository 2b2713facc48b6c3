"""
Unit tests for errhandling.core.outcome.
"""

from unittest.mock import Mock

import pytest

from errhandling.core.chain import ChainedError, construct
from errhandling.core.outcome import Failure, Outcome, Success
from errhandling.core.propagation import Slot, Boundary, boundary


def _parse_int(text):
    if text.isdigit():
        return Success(int(text))
    return Failure(construct(f"not a number: {text!r}"))


class TestFromPair:
    def test_success(self):
        outcome = Outcome.from_pair("value", None)
        assert outcome == Success("value")
        assert outcome.is_success

    def test_failure_promotes_foreign_error(self):
        outcome = Outcome.from_pair(None, ValueError("boom"))

        assert not outcome.is_success
        assert isinstance(outcome.error, ChainedError)
        assert outcome.error.message == "boom"


class TestCapture:
    def test_returned_value(self):
        assert Outcome.capture(int, "12") == Success(12)

    def test_raised_exception(self):
        outcome = Outcome.capture(int, "twelve")

        assert isinstance(outcome, Failure)
        assert "invalid literal" in outcome.error.message

    def test_signals_are_not_captured(self):
        """Propagation keeps unwinding through capture()."""
        err = Slot()

        def fail():
            Failure(construct("inner")).unwrap()

        with Boundary(err):
            Outcome.capture(fail)

        assert err.value.message == "inner"


class TestComposition:
    """Short-circuiting composition of steps."""

    def test_and_then_chains_successes(self):
        outcome = Success("4").and_then(_parse_int).map(lambda n: n * 10)
        assert outcome == Success(40)

    def test_first_failure_short_circuits(self):
        later_step = Mock()

        outcome = (
            Success("four")
            .and_then(_parse_int)
            .and_then(later_step)
            .map(later_step)
        )

        later_step.assert_not_called()
        assert isinstance(outcome, Failure)
        assert outcome.error.message == "not a number: 'four'"

    def test_with_cause_decorates_failures_only(self):
        failure = _parse_int("x").with_cause("could not read port")

        assert failure.error.short_form() == "not a number: 'x' -> could not read port"
        assert failure.error.root_message == "not a number: 'x'"
        assert Success(1).with_cause("ignored") == Success(1)

    def test_to_pair(self):
        error = construct("e")
        assert Success(3).to_pair() == (3, None)
        assert Failure(error).to_pair() == (None, error)

    def test_unwrap_or(self):
        assert Success(3).unwrap_or(0) == 3
        assert Failure(construct("e")).unwrap_or(0) == 0


class TestUnwrap:
    def test_success(self):
        assert Success("v").unwrap() == "v"

    def test_failure_propagates_to_boundary(self):
        @boundary(with_value=False)
        def run():
            port = _parse_int("eighty").with_cause("bad port").unwrap()
            pytest.fail(f"unwrap returned {port}")

        err = run()

        assert err.short_form() == "not a number: 'eighty' -> bad port"


def test_outcome_is_abstract():
    with pytest.raises(TypeError):
        Outcome()
