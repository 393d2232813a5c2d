"""
Utility functions for schema validation.
"""
from typing import Iterable, List, Optional


def clean_string_list(values: Optional[Iterable[str]]) -> List[str]:
    """
    Drop empty and whitespace-only entries from a list of strings.

    Entries are kept verbatim otherwise (answers may contain meaningful
    whitespace), preserving their order.

    Args:
        values: Strings from a form or an import file

    Returns:
        List of the non-blank entries
    """
    if not values:
        return []
    return [value for value in values if isinstance(value, str) and value.strip()]
