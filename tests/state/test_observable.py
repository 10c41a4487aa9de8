"""Tests for Observable and AppState."""

from playledger.data.errors import ErrorKind
from playledger.services.form_state import TransactionForm
from playledger.services.outcome import Outcome, OutcomeKind
from playledger.state.app_state import AppState
from playledger.state.observable import Observable


class TestObservable:
    """Tests for Observable."""

    def test_initial_value(self):
        obs = Observable(42)
        assert obs.value == 42

    def test_signal_emitted_on_change(self, qtbot):
        """Signal is emitted when value changes."""
        obs = Observable(0)

        received = []
        obs.changed.connect(lambda val: received.append(val))

        obs.set(5)
        obs.set(10)
        assert received == [5, 10]

    def test_signal_not_emitted_for_same_value(self, qtbot):
        """Signal is NOT emitted when setting to same value."""
        obs = Observable(5)

        received = []
        obs.subscribe(lambda val: received.append(val))

        obs.set(5)
        assert received == []

    def test_emit_changed_forces_signal(self, qtbot):
        obs = Observable([1, 2])

        received = []
        obs.subscribe(lambda val: received.append(val))

        obs.emit_changed()
        assert received == [[1, 2]]


class TestAppState:
    """Tests for AppState defaults and helpers."""

    def test_starts_empty(self):
        state = AppState()

        assert state.transactions.value == []
        assert state.members.value == []
        assert state.games.value == []
        assert state.is_loading.value is False
        assert state.form.value == TransactionForm.empty()
        assert state.last_outcome.value is None

    def test_publish_repeats_identical_outcome(self, qtbot):
        """The same outcome published twice notifies twice."""
        state = AppState()
        outcome = Outcome.failure(ErrorKind.SAVE, ValueError("bad"))

        received = []
        state.last_outcome.subscribe(received.append)

        state.publish(outcome)
        state.publish(outcome)

        assert received == [outcome, outcome]

    def test_publish_new_outcome(self, qtbot):
        state = AppState()
        state.publish(Outcome.success(OutcomeKind.LOADED))

        assert state.last_outcome.value.kind == OutcomeKind.LOADED
