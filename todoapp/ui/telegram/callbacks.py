# -*- coding: utf-8 -*-
"""
Callback data prefixes for the todo inline keyboards.
Use these instead of hardcoded strings in handlers.
"""
from __future__ import annotations

from typing import Optional


def parse_callback(data: str, expected_parts: int = 3) -> Optional[tuple[str, ...]]:
    """Parse callback data into parts by ':'. Returns None if fewer than expected_parts."""
    parts = data.split(":", expected_parts - 1)
    return tuple(parts) if len(parts) >= expected_parts else None


# td:st:<id>:<status>
PREFIX_STATUS = "td:st:"
# td:edit:<id>
PREFIX_EDIT = "td:edit:"
# td:del:<id>  ->  td:delc:<id>:yes|no
PREFIX_DELETE = "td:del:"
PREFIX_DELETE_CONFIRM = "td:delc:"
# td:f:<filter>
PREFIX_FILTER = "td:f:"
# td:prio:<priority>  (add flow)
PREFIX_ADD_PRIORITY = "td:prio:"

ADD_START = "td:add"
ADD_DUE_SKIP = "td:due:skip"
REFRESH = "td:refresh"
CANCEL = "cancel"
