"""Career advice prompt templates."""

from escapezone.agents.advice.prompts import ADVICE_TOPICS, build_advice_prompt

__all__ = ["ADVICE_TOPICS", "build_advice_prompt"]
