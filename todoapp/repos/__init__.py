# -*- coding: utf-8 -*-
"""In-memory repositories. Public API: RecordStore."""

from todoapp.repos.base import RecordStore

__all__ = [
    "RecordStore",
]
