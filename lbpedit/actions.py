"""Input buffering for actions such as jumping."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ActionBuffer:
    """Lets an action be requested slightly early or late, with a cooldown.

    ``pre`` is how long a request stays pending, ``post`` how long the action
    stays possible after it stops being available, and ``cooldown`` the
    minimum time between accepted requests.
    """

    pre: float
    post: float
    cooldown: float
    _available: bool = field(default=False, init=False, repr=False)
    _pre_timer: float = field(default=-1.0, init=False, repr=False)
    _post_timer: float = field(default=-1.0, init=False, repr=False)
    _cooldown_timer: float = field(default=-1.0, init=False, repr=False)

    def update(self, dt: float) -> None:
        """Advance all timers by ``dt`` seconds."""
        self._pre_timer -= dt
        self._post_timer -= dt
        self._cooldown_timer -= dt

    def set_action_available(self, available: bool) -> None:
        """Report whether the action is currently possible."""
        if self._available and not available:
            self._post_timer = self.post
        self._available = available

    def do_action(self) -> None:
        """Request the action, unless still cooling down."""
        if self._cooldown_timer > 0:
            return
        self._pre_timer = self.pre
        self._cooldown_timer = self.cooldown

    def is_action_time(self) -> bool:
        """Return True once when a pending request can be carried out."""
        ready = (self._post_timer > 0 or self._available) and self._pre_timer > 0
        if ready:
            self._pre_timer = -1.0
            self._post_timer = -1.0
        return ready