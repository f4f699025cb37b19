"""In-memory toast notifications.

Toasts live in a small state dict (``{'toasts': [...]}``) that only changes
through :func:`reduce`.  :class:`ToastService` owns the current state,
notifies subscribers after every change and removes dismissed toasts once
``TOAST_REMOVE_DELAY`` has elapsed.
"""
import logging
import threading
from typing import Callable, Dict, List, Optional

TOAST_LIMIT = 1
# Milliseconds a dismissed toast stays in state before it is removed
TOAST_REMOVE_DELAY = 1000000

ADD_TOAST = 'ADD_TOAST'
UPDATE_TOAST = 'UPDATE_TOAST'
DISMISS_TOAST = 'DISMISS_TOAST'
REMOVE_TOAST = 'REMOVE_TOAST'

_MAX_SAFE_INTEGER = 2 ** 53 - 1

logger = logging.getLogger('nephra.toast')


def reduce(state: Dict, action: Dict, limit: int = TOAST_LIMIT) -> Dict:
    """Return the toast state that results from applying *action* to *state*.

    *state* is never mutated.  Actions are dicts with a ``type`` key plus
    ``toast`` (ADD/UPDATE) or an optional ``toast_id`` (DISMISS/REMOVE;
    ``None`` targets every toast).

    Raises:
        ValueError: Unknown action type.
    """
    toasts: List[Dict] = state.get('toasts', [])
    kind = action.get('type')

    if kind == ADD_TOAST:
        return dict(state, toasts=([dict(action['toast'])] + toasts)[:limit])

    if kind == UPDATE_TOAST:
        changes = action['toast']
        return dict(state, toasts=[
            dict(t, **changes) if t['id'] == changes.get('id') else t
            for t in toasts
        ])

    if kind == DISMISS_TOAST:
        toast_id = action.get('toast_id')
        return dict(state, toasts=[
            dict(t, open=False) if toast_id is None or t['id'] == toast_id else t
            for t in toasts
        ])

    if kind == REMOVE_TOAST:
        toast_id = action.get('toast_id')
        if toast_id is None:
            return dict(state, toasts=[])
        return dict(state, toasts=[t for t in toasts if t['id'] != toast_id])

    raise ValueError(f"Unknown toast action: {kind!r}")


class ToastHandle:
    """Returned by :meth:`ToastService.toast` to control one toast."""

    def __init__(self, service: 'ToastService', toast_id: str) -> None:
        self.id = toast_id
        self._service = service

    def dismiss(self) -> None:
        self._service.dismiss(self.id)

    def update(self, **fields) -> None:
        self._service.update(self.id, **fields)


class ToastService:
    """Owns the toast state and its removal timers.

    Listeners registered with :meth:`subscribe` receive the new state after
    every dispatched action.  All methods are thread-safe; timers fire on
    their own threads.
    """

    def __init__(self, limit: int = TOAST_LIMIT,
                 remove_delay_ms: int = TOAST_REMOVE_DELAY) -> None:
        self._limit = limit
        self._remove_delay = remove_delay_ms / 1000.0
        self._state: Dict = {'toasts': []}
        self._listeners: List[Callable[[Dict], None]] = []
        self._timeouts: Dict[str, threading.Timer] = {}
        self._count = 0
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> Dict:
        with self._lock:
            return {'toasts': [dict(t) for t in self._state['toasts']]}

    @property
    def toasts(self) -> List[Dict]:
        return self.state['toasts']

    def dispatch(self, action: Dict) -> Dict:
        """Apply *action*, queue removals for dismissed toasts and notify
        listeners.  Returns the new state."""
        with self._lock:
            if action.get('type') == DISMISS_TOAST:
                toast_id = action.get('toast_id')
                for t in self._state['toasts']:
                    if toast_id is None or t['id'] == toast_id:
                        self._add_to_remove_queue(t['id'])
            self._state = reduce(self._state, action, self._limit)
            snapshot = self.state
            listeners = list(self._listeners)
        for listener in listeners:
            listener(snapshot)
        return snapshot

    def subscribe(self, listener: Callable[[Dict], None]) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
        return unsubscribe

    def toast(self, title: Optional[str] = None, description: Optional[str] = None,
              **props) -> ToastHandle:
        """Show a new toast and return a handle to it."""
        toast_id = self._gen_id()
        self.dispatch({
            'type': ADD_TOAST,
            'toast': dict(props, id=toast_id, title=title,
                          description=description, open=True),
        })
        logger.debug("Toast %s: %s", toast_id, title)
        return ToastHandle(self, toast_id)

    def update(self, toast_id: str, **fields) -> None:
        self.dispatch({'type': UPDATE_TOAST, 'toast': dict(fields, id=toast_id)})

    def dismiss(self, toast_id: Optional[str] = None) -> None:
        """Close *toast_id* (or every toast) and queue it for removal."""
        self.dispatch({'type': DISMISS_TOAST, 'toast_id': toast_id})

    def remove(self, toast_id: Optional[str] = None) -> None:
        self.dispatch({'type': REMOVE_TOAST, 'toast_id': toast_id})

    def pending_removals(self) -> List[str]:
        """Ids of dismissed toasts still waiting for their removal timer."""
        with self._lock:
            return list(self._timeouts)

    def shutdown(self) -> None:
        """Cancel every pending removal timer."""
        with self._lock:
            for timer in self._timeouts.values():
                timer.cancel()
            self._timeouts.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _gen_id(self) -> str:
        with self._lock:
            self._count = (self._count + 1) % _MAX_SAFE_INTEGER
            return str(self._count)

    def _add_to_remove_queue(self, toast_id: str) -> None:
        if toast_id in self._timeouts:
            return
        timer = threading.Timer(self._remove_delay, self._expire, args=(toast_id,))
        timer.daemon = True
        self._timeouts[toast_id] = timer
        timer.start()

    def _expire(self, toast_id: str) -> None:
        with self._lock:
            self._timeouts.pop(toast_id, None)
        self.remove(toast_id)
