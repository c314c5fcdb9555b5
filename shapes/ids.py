#Purpose: Id generation for committed features.
#Ids are unique per generator for the life of the process. The session owns
#one generator, so export stays deterministic under test (CounterIdGenerator).

import itertools
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def next_id(self, prefix: str) -> str:
        ...


class CounterIdGenerator:
    """prefix_1, prefix_2, ... shared across prefixes, never reset."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}_{next(self._counter)}"


class UuidIdGenerator:
    def next_id(self, prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex}"
