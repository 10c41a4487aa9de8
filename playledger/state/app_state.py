"""Central application state.

AppState holds every piece of process-wide state: the three cached
collections, the loading flag, the editable transaction form and the most
recent controller outcome. It is owned by the ApplicationContext and
handed to the services explicitly.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from playledger.domain.models import Game, Member, Transaction
from playledger.services.form_state import TransactionForm
from playledger.state.observable import Observable

if TYPE_CHECKING:
    from playledger.services.outcome import Outcome


@dataclass
class AppState:
    """Central application state.

    Example:
        >>> state = AppState()
        >>> state.transactions.subscribe(lambda txns: print(f"Count: {len(txns)}"))
        >>> state.transactions.set([transaction1, transaction2])
        # Prints: "Count: 2"
    """

    # Remote collections (replaced wholesale on refresh)
    transactions: Observable[list[Transaction]] = field(
        default_factory=lambda: Observable([])
    )
    members: Observable[list[Member]] = field(default_factory=lambda: Observable([]))
    games: Observable[list[Game]] = field(default_factory=lambda: Observable([]))

    # Form state
    form: Observable[TransactionForm] = field(
        default_factory=lambda: Observable(TransactionForm.empty())
    )

    # Loading/outcome state
    is_loading: Observable[bool] = field(default_factory=lambda: Observable(False))
    last_outcome: Observable[Optional["Outcome"]] = field(
        default_factory=lambda: Observable(None)
    )

    def set_loading(self, loading: bool) -> None:
        """Set loading state."""
        self.is_loading.set(loading)

    def publish(self, outcome: "Outcome") -> None:
        """Publish a controller outcome to subscribers.

        Always emits, even when an identical outcome was published before
        (e.g. the same save failure twice in a row).
        """
        if outcome == self.last_outcome.value:
            self.last_outcome.emit_changed()
        else:
            self.last_outcome.set(outcome)
