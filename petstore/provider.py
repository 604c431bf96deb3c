# petstore/provider.py
"""
Acceso CRUD validado a la tabla pets. Cada operación clasifica la URI,
aplica la selección correspondiente y, si hay cambios, notifica la ruta.
"""
from typing import Any, Dict, Mapping, Optional, Sequence
import logging

from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError

from .contract import (
    CONTENT_ITEM_TYPE,
    CONTENT_LIST_TYPE,
    COLUMN_ID,
    COLUMN_PET_GENDER,
    COLUMN_PET_NAME,
    COLUMN_PET_WEIGHT,
    Gender,
    as_int,
    pets,
)
from .cursor import PetCursor
from .db import PetDatabase, get_database
from .errors import InvalidArgument, UnsupportedReference
from .notifications import ChangeNotifier
from .uri_matcher import Collection, Item, classify, with_appended_id

logger = logging.getLogger(__name__)


class PetProvider:
    def __init__(self, database: PetDatabase, notifier: Optional[ChangeNotifier] = None):
        self.database = database
        self.notifier = notifier if notifier is not None else ChangeNotifier()

    def query(
        self,
        uri: str,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
        sort_order: Optional[str] = None,
    ) -> PetCursor:
        where = self._where_for(uri, selection, selection_args, "Query")

        stmt = select(*_columns(projection))
        if where is not None:
            stmt = stmt.where(where)
        if sort_order:
            stmt = stmt.order_by(text(sort_order))

        cursor = PetCursor(self.database, stmt)
        cursor.set_notification_uri(self.notifier, uri)
        return cursor

    def get_type(self, uri: str) -> str:
        ref = classify(uri)
        if isinstance(ref, Collection):
            return CONTENT_LIST_TYPE
        if isinstance(ref, Item):
            return CONTENT_ITEM_TYPE
        raise UnsupportedReference(f"Unknown URI {uri}", uri)

    def insert(self, uri: str, values: Mapping[str, Any]) -> Optional[str]:
        if not isinstance(classify(uri), Collection):
            raise UnsupportedReference(f"Insertion is not supported for {uri}", uri)
        row = validate_values(values, partial=False)
        return self._insert_pet(uri, row)

    def _insert_pet(self, uri: str, row: Dict[str, Any]) -> Optional[str]:
        try:
            with self.database.engine.begin() as conn:
                result = conn.execute(insert(pets).values(**row))
                key = result.inserted_primary_key
        except SQLAlchemyError as e:
            logger.error(f"Failed to insert row for {uri}: {e}")
            return None

        if not key or key[0] is None:
            logger.error(f"Failed to insert row for {uri}")
            return None

        self.notifier.notify_change(uri)
        return with_appended_id(uri, key[0])

    def delete(
        self,
        uri: str,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        where = self._where_for(uri, selection, selection_args, "Deletion")

        stmt = delete(pets)
        if where is not None:
            stmt = stmt.where(where)
        with self.database.engine.begin() as conn:
            rows_deleted = conn.execute(stmt).rowcount

        if rows_deleted != 0:
            self.notifier.notify_change(uri)
        return rows_deleted

    def update(
        self,
        uri: str,
        values: Mapping[str, Any],
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        where = self._where_for(uri, selection, selection_args, "Update")
        return self._update_pet(uri, values, where)

    def _update_pet(self, uri: str, values: Mapping[str, Any], where) -> int:
        if not values:
            return 0

        row = validate_values(values, partial=True)

        stmt = update(pets).values(**row)
        if where is not None:
            stmt = stmt.where(where)
        try:
            with self.database.engine.begin() as conn:
                rows_updated = conn.execute(stmt).rowcount
        except SQLAlchemyError as e:
            logger.error(f"Failed to update row for {uri}: {e}")
            return 0

        if rows_updated == -1:
            logger.error(f"Failed to update row for {uri}")
            return 0
        if rows_updated != 0:
            self.notifier.notify_change(uri)
        return rows_updated

    def _where_for(self, uri, selection, selection_args, action: str):
        ref = classify(uri)
        if isinstance(ref, Collection):
            return _bind_selection(selection, selection_args)
        if isinstance(ref, Item):
            # la selección del llamante se ignora para una mascota concreta
            return pets.c[COLUMN_ID] == ref.id
        raise UnsupportedReference(f"{action} is not supported for {uri}", uri)


def validate_values(values: Mapping[str, Any], partial: bool) -> Dict[str, Any]:
    """
    Comprueba los campos de una mascota y devuelve una copia normalizada
    (género como código entero, peso como int).

    En inserción (partial=False) name y gender son obligatorios; en
    actualización solo se comprueban los campos presentes.
    """
    row = dict(values)

    if COLUMN_ID in row:
        raise InvalidArgument("Pet id is generated by the store", COLUMN_ID)

    if not partial or COLUMN_PET_NAME in row:
        name = row.get(COLUMN_PET_NAME)
        if name is None or str(name) == "":
            raise InvalidArgument("Pet requires a name", COLUMN_PET_NAME)
        row[COLUMN_PET_NAME] = str(name)

    if row.get(COLUMN_PET_WEIGHT) is not None:
        weight = as_int(row[COLUMN_PET_WEIGHT])
        if weight is None or weight < 0:
            raise InvalidArgument("Pet requires valid weight", COLUMN_PET_WEIGHT)
        row[COLUMN_PET_WEIGHT] = weight

    if not partial or COLUMN_PET_GENDER in row:
        gender = Gender.coerce(row.get(COLUMN_PET_GENDER))
        if gender is None:
            raise InvalidArgument("Pet requires valid gender", COLUMN_PET_GENDER)
        row[COLUMN_PET_GENDER] = int(gender)

    return row


def _columns(projection: Optional[Sequence[str]]):
    if not projection:
        return [pets]
    unknown = [name for name in projection if name not in pets.c]
    if unknown:
        raise InvalidArgument(f"Unknown column(s): {', '.join(unknown)}")
    return [pets.c[name] for name in projection]


def _bind_selection(selection: Optional[str], selection_args: Optional[Sequence[Any]]):
    """
    Convierte una selección con marcadores '?' en un text() con parámetros
    con nombre. Los '?' dentro de literales entre comillas simples se respetan.
    """
    if not selection:
        return None

    args = list(selection_args or [])
    params: Dict[str, Any] = {}
    parts = []
    in_quote = False
    for ch in selection:
        if ch == "'":
            in_quote = not in_quote
        elif ch == "?" and not in_quote:
            index = len(params)
            if index >= len(args):
                raise InvalidArgument(f"Not enough selection arguments for {selection!r}")
            params[f"arg{index}"] = args[index]
            parts.append(f":arg{index}")
            continue
        elif ch == ":":
            # text() interpreta ':nombre' como parámetro
            parts.append("\\:")
            continue
        parts.append(ch)

    if len(params) != len(args):
        raise InvalidArgument(f"Too many selection arguments for {selection!r}")
    return text("".join(parts)).bindparams(**params)


_provider: PetProvider | None = None

def get_provider() -> PetProvider:
    global _provider
    if _provider is None:
        _provider = PetProvider(get_database())
    return _provider
