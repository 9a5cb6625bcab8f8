"""Bot router composition.

A single catch-all message route: command dispatch happens inside the handler, so plain-text
prompts and slash commands share one reply path.
"""

from __future__ import annotations

from aiogram import Router

from src.bot.handlers import handle_message

router = Router(name="atlassian_search")
router.message.register(handle_message)
