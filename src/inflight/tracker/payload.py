"""Safe access to loosely-shaped portal JSON documents."""

import math
from typing import Any, Iterable, Optional, Tuple, Union

Path = Tuple[str, ...]


def as_number(value: Any) -> Optional[float]:
    """Coerce a JSON scalar to a finite float, or None.

    Portals send numbers both as JSON numbers and as strings ("35000.5").
    Booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def as_text(value: Any) -> Optional[str]:
    """Coerce a JSON scalar to a non-empty stripped string, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        s = value.strip()
        return s or None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return str(int(value)) if value.is_integer() else str(value)
    return None


class RawPayload:
    """Read-only wrapper around a decoded JSON document.

    Lookups never raise: a missing key, or a step through something that is
    not an object, yields None.
    """

    def __init__(self, data: Any):
        self._data = data

    def get(self, path: Union[str, Path]) -> Any:
        """Return the value at a key path such as ("flight_info", "flight_no")."""
        if isinstance(path, str):
            path = (path,)
        node = self._data
        for key in path:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
            if node is None:
                return None
        return node

    def first(self, paths: Iterable[Path], coerce=None) -> Any:
        """Return the first present value among paths.

        With coerce, a value only counts when coerce(value) is not None and the
        coerced value is returned.
        """
        for path in paths:
            value = self.get(path)
            if value is None:
                continue
            if coerce is None:
                return value
            coerced = coerce(value)
            if coerced is not None:
                return coerced
        return None

    def number(self, path: Union[str, Path]) -> Optional[float]:
        return as_number(self.get(path))

    def __repr__(self) -> str:
        keys = sorted(self._data) if isinstance(self._data, dict) else type(self._data).__name__
        return f"RawPayload({keys})"
