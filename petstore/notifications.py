# petstore/notifications.py
from typing import Callable, List, Tuple
from urllib.parse import urlsplit
import logging

logger = logging.getLogger(__name__)

Observer = Callable[[str], None]


def _key(uri: str) -> Tuple[str, ...]:
    return tuple(s for s in urlsplit(uri).path.split("/") if s)


class Registration:
    """Una suscripción concreta; se da de baja por identidad."""

    def __init__(self, path: Tuple[str, ...], callback: Observer, notify_for_descendants: bool):
        self.path = path
        self.callback = callback
        self.notify_for_descendants = notify_for_descendants


class ChangeNotifier:
    """
    Registro de observadores por ruta de recurso.
    notify_change() entrega de forma síncrona, en orden de registro.
    """

    def __init__(self):
        self._observers: List[Registration] = []

    def register_observer(self, uri: str, callback: Observer, notify_for_descendants: bool = True) -> Registration:
        registration = Registration(_key(uri), callback, notify_for_descendants)
        self._observers.append(registration)
        return registration

    def unregister(self, registration: Registration):
        self._observers = [r for r in self._observers if r is not registration]

    def unregister_observer(self, callback: Observer):
        """Da de baja todas las suscripciones de callback."""
        self._observers = [r for r in self._observers if r.callback != callback]

    def observer_count(self) -> int:
        return len(self._observers)

    def notify_change(self, uri: str):
        changed = _key(uri)
        for registration in list(self._observers):
            if not _reaches(changed, registration.path, registration.notify_for_descendants):
                continue
            try:
                registration.callback(uri)
            except Exception as e:
                logger.error(f"Error notifying change for {uri}: {e}", exc_info=True)


def _reaches(changed: Tuple[str, ...], observed: Tuple[str, ...], descendants: bool) -> bool:
    if changed == observed:
        return True
    # cambio por debajo de la ruta observada
    if len(changed) > len(observed) and changed[: len(observed)] == observed:
        return descendants
    # cambio en un ancestro: avisa a todos los hijos
    return len(observed) > len(changed) and observed[: len(changed)] == changed
