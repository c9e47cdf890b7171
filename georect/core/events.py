from typing import Any, Callable, Dict
from blinker import Signal


class Evented:
    """
    Mixin giving an object named events backed by blinker signals.
    Receivers are called as `receiver(sender, **data)`.
    """

    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def signal(self, name: str) -> Signal:
        """Returns the signal for `name`, creating it on first use."""
        sig = self._signals.get(name)
        if sig is None:
            sig = self._signals[name] = Signal(name)
        return sig

    def on(self, name: str, receiver: Callable[..., Any]):
        # Held strongly; detach with off().
        self.signal(name).connect(receiver, weak=False)
        return self

    def off(self, name: str, receiver: Callable[..., Any]):
        sig = self._signals.get(name)
        if sig is not None:
            sig.disconnect(receiver)
        return self

    def listens(self, name: str) -> bool:
        sig = self._signals.get(name)
        return sig is not None and bool(sig.receivers)

    def fire(self, name: str, **data: Any):
        sig = self._signals.get(name)
        if sig is not None:
            sig.send(self, **data)
        return self
