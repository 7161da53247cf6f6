"""Route inbound frames and user actions through the session state machine.

The router lives *outside* the pure :mod:`planewar.session` functions so
that the one mutable reference (the current :class:`Session`) and the
outbound send capability sit in a single place. The channel itself is
owned by the surrounding application and handed in as a ``send``
callable; the router never opens or reconnects anything.

Every call runs to completion on the caller's thread. Callers must feed
frames in the order the channel delivered them and must not call the
router from two threads at once.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from . import session as _session
from .events import EventParseError, ServerError, ServerEvent, parse_event
from .geometry import Footprint
from .protocol import Action
from .session import Session, Step

logger = logging.getLogger(__name__)

SendFn = Callable[[dict], bool]


class GameRouter:
    """Session-scoped helper that converts frames → transitions → sends."""

    def __init__(
        self,
        send: Optional[SendFn] = None,
        *,
        on_error: Optional[Callable[[str], None]] = None,
        on_change: Optional[Callable[[Session], None]] = None,
        session: Optional[Session] = None,
    ) -> None:
        self._send_fn = send
        self._on_error = on_error
        self._on_change = on_change
        self._session = session if session is not None else Session()

    @property
    def session(self) -> Session:
        return self._session

    # ------------------------------------------------------------------
    # Channel lifecycle
    # ------------------------------------------------------------------
    def attach(self, send: SendFn) -> None:
        """Bind a freshly opened channel; starts a clean session."""
        self._send_fn = send
        self._set(_session.connection_opened(self._session))

    def detach(self) -> None:
        """The channel closed; later actions are dropped until re-attached."""
        self._send_fn = None
        self._set(_session.connection_closed(self._session))

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------
    def handle_frame(self, obj: Any) -> Optional[ServerEvent]:
        """Apply one decoded inbound frame; returns the parsed event or None."""
        try:
            event = parse_event(obj)
        except EventParseError as exc:
            logger.warning("Dropping inbound frame: %s", exc)
            return None
        logger.debug("event %r", event)
        self._set(_session.apply_event(self._session, event))
        if isinstance(event, ServerError) and self._on_error is not None:
            self._on_error(event.message)
        return event

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def create_room(self) -> bool:
        return self._step(_session.create_room(self._session))

    def join_room(self, room_id: str) -> bool:
        return self._step(_session.join_room(self._session, room_id))

    def rotate(self) -> bool:
        return self._set(_session.rotate(self._session))

    def preview(self, anchor: int) -> tuple[Footprint, bool]:
        return _session.preview(self._session, anchor)

    def place(self, anchor: int) -> bool:
        return self._step(_session.place_plane(self._session, anchor))

    def remove(self, cell: int) -> bool:
        return self._step(_session.remove_plane(self._session, cell))

    def ready(self) -> bool:
        return self._step(_session.declare_ready(self._session))

    def attack(self, cell: int) -> bool:
        return self._step(_session.attack(self._session, cell))

    def mark(self, cell: int) -> bool:
        return self._set(_session.mark(self._session, cell))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _step(self, step: Step) -> bool:
        nxt, action = step
        if action is None:
            return False
        self._set(nxt)
        self._send(action)
        return True

    def _set(self, nxt: Session) -> bool:
        if nxt == self._session:
            return False
        self._session = nxt
        if self._on_change is not None:
            self._on_change(nxt)
        return True

    def _send(self, action: Action) -> bool:
        msg = action.to_message()
        if self._send_fn is None:
            logger.warning("No open channel – dropping %s", msg["type"])
            return False
        sent = self._send_fn(msg)
        if not sent:
            logger.warning("Send failed – dropped %s", msg["type"])
        return sent
