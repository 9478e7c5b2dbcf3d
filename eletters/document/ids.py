"""Id generation for letters, screens, and elements."""

from __future__ import annotations

import itertools
import uuid
from typing import Protocol, runtime_checkable


@runtime_checkable
class IdGenerator(Protocol):
    """Source of fresh unique ids."""

    def new_id(self) -> str: ...


class RandomIds:
    """Random 21-character ids (uuid4 hex)."""

    def new_id(self) -> str:
        return uuid.uuid4().hex[:21]


class SequentialIds:
    """Deterministic ids ``<prefix>1``, ``<prefix>2``, ... for tests and fixtures."""

    def __init__(self, prefix: str = "id-") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)

    def new_id(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


def letter_id(ids: IdGenerator) -> str:
    return f"letter-{ids.new_id()}"


def screen_id(ids: IdGenerator) -> str:
    return f"screen-{ids.new_id()}"
