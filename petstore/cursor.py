from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import func, select
from sqlalchemy.sql import Select

from .db import PetDatabase
from .notifications import ChangeNotifier, Observer, Registration


class PetCursor:
    """
    Resultado perezoso de una consulta: no ejecuta SQL hasta que se recorre
    y cada recorrido vuelve a lanzar la consulta.
    """

    def __init__(self, database: PetDatabase, statement: Select):
        self._database = database
        self._statement = statement
        self._notifier: Optional[ChangeNotifier] = None
        self._notification_uri: Optional[str] = None
        self._registrations: List[Registration] = []
        self.closed = False

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        self._check_open()
        with self._database.engine.connect() as conn:
            rows = conn.execute(self._statement).mappings().all()
        for row in rows:
            yield dict(row)

    def fetchall(self) -> List[Dict[str, Any]]:
        return list(self)

    def first(self) -> Optional[Dict[str, Any]]:
        return next(iter(self), None)

    def count(self) -> int:
        self._check_open()
        stmt = select(func.count()).select_from(self._statement.subquery())
        with self._database.engine.connect() as conn:
            return conn.execute(stmt).scalar_one()

    @property
    def notification_uri(self) -> Optional[str]:
        return self._notification_uri

    def set_notification_uri(self, notifier: ChangeNotifier, uri: str):
        self._notifier = notifier
        self._notification_uri = uri

    def register_observer(self, callback: Observer):
        self._check_open()
        if self._notifier is None or self._notification_uri is None:
            raise RuntimeError("Cursor has no notification uri")
        registration = self._notifier.register_observer(
            self._notification_uri, callback, notify_for_descendants=True
        )
        self._registrations.append(registration)

    def unregister_observer(self, callback: Observer):
        # solo las suscripciones de este cursor
        for registration in [r for r in self._registrations if r.callback == callback]:
            self._registrations.remove(registration)
            self._notifier.unregister(registration)

    def close(self):
        for registration in self._registrations:
            self._notifier.unregister(registration)
        self._registrations = []
        self.closed = True

    def _check_open(self):
        if self.closed:
            raise RuntimeError("Cursor is closed")
