# petstore/uri_matcher.py
"""
Clasificación de referencias de recurso: /pets es la colección,
/pets/<id> una mascota concreta y cualquier otra cosa no coincide.
"""
import re
from dataclasses import dataclass
from typing import List, Tuple, Union
from urllib.parse import urlsplit

from .contract import CONTENT_AUTHORITY, CONTENT_SCHEME, MAX_INTEGER, PATH_PETS

NO_MATCH = -1
PETS = 100
PET_ID = 101

_NUMBER = re.compile(r"[0-9]+")


def _is_id(segment: str) -> bool:
    # ids fuera del rango INTEGER de SQLite no pueden existir
    return _NUMBER.fullmatch(segment) is not None and int(segment) <= MAX_INTEGER


@dataclass(frozen=True)
class Collection:
    pass


@dataclass(frozen=True)
class Item:
    id: int


@dataclass(frozen=True)
class Unmatched:
    pass


ResourceRef = Union[Collection, Item, Unmatched]


def _segments(path: str) -> List[str]:
    return [s for s in path.split("/") if s]


class UriMatcher:
    """
    Tabla estática de patrones (pattern, code) evaluada en orden.
    '#' casa con un número y '*' con cualquier segmento.
    """

    def __init__(self, authority: str, scheme: str = CONTENT_SCHEME):
        self.authority = authority
        self.scheme = scheme
        self._routes: List[Tuple[Tuple[str, ...], int]] = []

    def add_uri(self, path: str, code: int) -> None:
        if code < 0:
            raise ValueError(f"Invalid match code {code}")
        self._routes.append((tuple(_segments(path)), code))

    def _path_of(self, uri: str) -> str | None:
        parts = urlsplit(uri)
        if parts.scheme and parts.scheme != self.scheme:
            return None
        if parts.netloc and parts.netloc != self.authority:
            return None
        return parts.path

    def match(self, uri: str) -> int:
        path = self._path_of(uri or "")
        if path is None:
            return NO_MATCH
        segments = _segments(path)
        for pattern, code in self._routes:
            if len(pattern) != len(segments):
                continue
            if all(_segment_matches(p, s) for p, s in zip(pattern, segments)):
                return code
        return NO_MATCH


def _segment_matches(pattern: str, segment: str) -> bool:
    if pattern == "#":
        return _is_id(segment)
    if pattern == "*":
        return True
    return pattern == segment


def parse_id(uri: str) -> int:
    """Devuelve el último segmento numérico de la URI, o -1."""
    segments = _segments(urlsplit(uri).path)
    if not segments or not _is_id(segments[-1]):
        return -1
    return int(segments[-1])


def with_appended_id(uri: str, id: int) -> str:
    return f"{uri.rstrip('/')}/{id}"


_matcher = UriMatcher(CONTENT_AUTHORITY)
_matcher.add_uri(PATH_PETS, PETS)
_matcher.add_uri(PATH_PETS + "/#", PET_ID)


def classify(uri: str) -> ResourceRef:
    match = _matcher.match(uri)
    if match == PETS:
        return Collection()
    if match == PET_ID:
        return Item(parse_id(uri))
    return Unmatched()
