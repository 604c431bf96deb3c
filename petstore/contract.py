# petstore/contract.py
"""
Contrato público del almacén de mascotas: nombres de tabla y columnas,
valores de género, tipos de contenido y URIs base.
"""
import enum
import re
from typing import Any, Optional

from sqlalchemy import Column, Integer, MetaData, String, Table

from .config import get_settings

CONTENT_SCHEME = "content"
CONTENT_AUTHORITY = get_settings().content_authority
PATH_PETS = "pets"
BASE_CONTENT_URI = f"{CONTENT_SCHEME}://{CONTENT_AUTHORITY}"
CONTENT_URI = f"{BASE_CONTENT_URI}/{PATH_PETS}"

# Tipos de contenido devueltos por get_type()
CONTENT_LIST_TYPE = "list-of-pets"
CONTENT_ITEM_TYPE = "single-pet"

TABLE_NAME = "pets"
COLUMN_ID = "id"
COLUMN_PET_NAME = "name"
COLUMN_PET_BREED = "breed"
COLUMN_PET_GENDER = "gender"
COLUMN_PET_WEIGHT = "weight"

ALL_COLUMNS = (COLUMN_ID, COLUMN_PET_NAME, COLUMN_PET_BREED, COLUMN_PET_GENDER, COLUMN_PET_WEIGHT)

# rango de INTEGER en SQLite (entero con signo de 64 bits)
MAX_INTEGER = 2**63 - 1
MIN_INTEGER = -(2**63)

_INTEGER = re.compile(r"-?[0-9]+")


def as_int(value: Any) -> Optional[int]:
    """
    Convierte int, float entero o cadena de dígitos a int.
    Devuelve None para cualquier otro valor o si sale del rango de SQLite.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = int(value) if value.is_integer() else None
    elif isinstance(value, str):
        value = int(value.strip()) if _INTEGER.fullmatch(value.strip()) else None
    if not isinstance(value, int) or not MIN_INTEGER <= value <= MAX_INTEGER:
        return None
    return value


class Gender(enum.IntEnum):
    UNKNOWN = 0
    MALE = 1
    FEMALE = 2

    @classmethod
    def coerce(cls, value: Any) -> Optional["Gender"]:
        """
        Acepta el código (0/1/2, también 1.0 o "1") o el nombre ("male").
        Devuelve None si el valor no corresponde a ningún género.
        """
        if isinstance(value, str) and not _INTEGER.fullmatch(value.strip()):
            return cls.__members__.get(value.strip().upper())
        code = as_int(value)
        if code is None:
            return None
        try:
            return cls(code)
        except ValueError:
            return None


def is_valid_gender(value: Any) -> bool:
    return Gender.coerce(value) is not None


metadata = MetaData()

pets = Table(
    TABLE_NAME,
    metadata,
    Column(COLUMN_ID, Integer, primary_key=True, autoincrement=True),
    Column(COLUMN_PET_NAME, String, nullable=False),
    Column(COLUMN_PET_BREED, String),
    Column(COLUMN_PET_GENDER, Integer, nullable=False, default=int(Gender.UNKNOWN)),
    Column(COLUMN_PET_WEIGHT, Integer),
)
