# =============================================================================
# lib/filters.py - List Filtering and Sorting
# =============================================================================
# In-memory helpers behind every list endpoint's query filters.
# Each helper takes a list of record dicts and returns a new list; the input
# is never mutated.
#
# Usage:
#   from lib.filters import search_records, sort_records
#   rows = search_records(rows, "tom", ["name", "category"])
#   rows = sort_records(rows, "quantity", "desc")
# =============================================================================

from typing import Any, Iterable

SORT_DIRECTIONS = ("asc", "desc")


def search_records(
    records: list[dict[str, Any]],
    term: str | None,
    fields: Iterable[str],
) -> list[dict[str, Any]]:
    """
    Keep records where any of `fields` contains `term` (case-insensitive).

    A blank or missing term returns every record. None-valued fields never match.

    Example:
        search_records(items, "TOM", ["name"])  # matches "Tomatoes"
    """
    if not term or not term.strip():
        return list(records)

    needle = term.strip().lower()
    fields = list(fields)
    return [
        record for record in records
        if any(
            record.get(field) is not None and needle in str(record[field]).lower()
            for field in fields
        )
    ]


def filter_equals(
    records: list[dict[str, Any]],
    field: str,
    value: Any,
    all_value: Any = "all",
) -> list[dict[str, Any]]:
    """
    Keep records whose `field` equals `value`.

    None, "" and `all_value` disable the filter.
    """
    if value is None or value == "" or value == all_value:
        return list(records)
    return [record for record in records if record.get(field) == value]


def _sort_key(value: Any) -> tuple[int, Any]:
    # Group by kind so mixed columns never compare str to int
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float)):
        return (0, value)
    return (1, str(value).lower())


def sort_records(
    records: list[dict[str, Any]],
    field: str | None,
    direction: str = "asc",
) -> list[dict[str, Any]]:
    """
    Sort records by one field.

    Strings compare case-insensitively, numbers numerically. Records with a
    None (or missing) value come first ascending and last descending. The
    sort is stable.

    Raises:
        ValueError: If direction is not "asc" or "desc"
    """
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Invalid sort direction: {direction!r} (expected 'asc' or 'desc')")
    if not field:
        return list(records)

    missing = [record for record in records if record.get(field) is None]
    present = [record for record in records if record.get(field) is not None]
    present.sort(key=lambda record: _sort_key(record[field]), reverse=(direction == "desc"))

    if direction == "asc":
        return missing + present
    return present + missing
