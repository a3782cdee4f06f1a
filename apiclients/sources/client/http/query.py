from collections.abc import Mapping
from typing import Any, Dict, List, Tuple


def serialize_query_value(value: Any) -> str:
    """Render a query value the way the vendor APIs expect it"""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set)):
        return ",".join(serialize_query_value(item) for item in value)
    return str(value)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, set, Mapping)):
        return len(value) == 0
    return False


class QueryBuilder:
    """
    Collects optional query arguments into an ordered, filtered mapping.

    Only non-empty values are kept, in the order they were added:

        query = (
            QueryBuilder()
            .add("include", include)
            .add_positive("count", count)
            .build()
        )
    """

    def __init__(self) -> None:
        self._params: List[Tuple[str, str]] = []

    def add(self, name: str, value: Any) -> "QueryBuilder":
        """Add `name` unless `value` is None or an empty string/collection"""
        if not _is_empty(value):
            self._params.append((name, serialize_query_value(value)))
        return self

    def add_positive(self, name: str, value: Any) -> "QueryBuilder":
        """Add `name` only for integers greater than zero (0 means unset)"""
        if value is not None and not isinstance(value, bool) and int(value) > 0:
            self._params.append((name, str(int(value))))
        return self

    def build(self) -> Dict[str, str]:
        """Ordered name -> value mapping; a later add of the same name wins"""
        return dict(self._params)
