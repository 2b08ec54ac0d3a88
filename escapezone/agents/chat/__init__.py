"""Chat assistant prompt templates."""

from escapezone.agents.chat.prompts import CHAT_GREETING, CHAT_SYSTEM_PROMPT

__all__ = ["CHAT_GREETING", "CHAT_SYSTEM_PROMPT"]
