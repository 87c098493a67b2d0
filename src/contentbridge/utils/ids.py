"""Synthetic identifier supply.

Converters fall back to a generated ID when a source item carries neither
its own ID nor a related-entity ID. Generated IDs are prefixed so they
can be told apart from provider-issued ones. They are not unique or
stable across conversions.
"""

import itertools
import random
import re
import string
from collections.abc import Callable

IdFactory = Callable[[], str]

GENERATED_ID_PREFIX = "gen-"

_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 9
_GENERATED_ID_PATTERN = re.compile(rf"^{GENERATED_ID_PREFIX}[a-z0-9]+$")


def generate_id() -> str:
    """Return a short random identifier such as ``gen-k3j9x0a2b``."""
    suffix = "".join(random.choices(_ALPHABET, k=_ID_LENGTH))
    return f"{GENERATED_ID_PREFIX}{suffix}"


def is_generated_id(value: str | None) -> bool:
    """Check whether an identifier came from an IdFactory rather than a provider."""
    return bool(value) and _GENERATED_ID_PATTERN.match(value) is not None


class SequentialIdFactory:
    """Deterministic IdFactory producing ``gen-1``, ``gen-2``, ...

    Example:
        >>> ids = SequentialIdFactory()
        >>> ids(), ids()
        ('gen-1', 'gen-2')
    """

    def __init__(self, prefix: str = GENERATED_ID_PREFIX, start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self._prefix}{next(self._counter)}"
