"""Named sequence counters backing entry ID allocation."""

from collections.abc import Awaitable, Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# Computes the last value already in use when a counter document is missing
type SeedFunc = Callable[[], Awaitable[int]]


class CounterName(StrEnum):
    """Identifier namespaces, one counter document each."""

    CADET = "cadet"
    POOMSAE = "poomsae"


class Counter(BaseModel):
    """Atomic counter for sequential entry numbers.

    The counter name is the document _id, so MongoDB's primary key
    guarantees one document per namespace.
    """

    name: str = Field(alias="_id")
    seq: int = Field(default=0, ge=0)  # Last issued value; next allocation returns seq + 1

    model_config = ConfigDict(populate_by_name=True)
