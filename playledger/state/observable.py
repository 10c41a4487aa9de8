"""Reactive state container with Qt signal integration."""

from typing import Callable, Generic, Optional, TypeVar

from PySide6.QtCore import QObject, Signal

T = TypeVar("T")


class Observable(QObject, Generic[T]):
    """Value holder that emits `changed` when its value is replaced.

    Widgets subscribe to the observables in AppState instead of polling
    the services, so a cache refresh or a form reset repaints whatever
    depends on it.

    Example:
        >>> loading = Observable(False)
        >>> loading.subscribe(lambda busy: print("busy" if busy else "idle"))
        >>> loading.set(True)  # Prints: "busy"
    """

    changed = Signal(object)

    def __init__(self, initial: T, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._value = initial

    @property
    def value(self) -> T:
        """Current value."""
        return self._value

    def set(self, new_value: T) -> None:
        """Replace the value, emitting `changed` only if it differs."""
        if new_value != self._value:
            self._value = new_value
            self.changed.emit(new_value)

    def subscribe(self, callback: Callable[[T], None]) -> None:
        """Call `callback(new_value)` on every change."""
        self.changed.connect(callback)

    def emit_changed(self) -> None:
        """Re-emit the current value (e.g. after an equal-valued reload)."""
        self.changed.emit(self._value)
