"""
Handlers module - combines all handler routers.
"""
from __future__ import annotations

from aiogram import Router

from todoapp.ui.telegram.handlers import cancel, start, todos

# Create main router
router = Router()

# IMPORTANT: cancel.router must come before todos.router so that "cancel"
# wins over the FSM text handlers of the add/edit flows
router.include_router(start.router)
router.include_router(cancel.router)
router.include_router(todos.router)

__all__ = ["router"]
