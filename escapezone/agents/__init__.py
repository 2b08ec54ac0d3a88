"""
Prompt construction for the Gemini-backed features.

Each subpackage owns the prompts (and, where the response is structured,
the output schema) for one feature:
- recommendation: filter-driven entertainment picks (structured JSON)
- advice: career roadmap for a topic (markdown)
- chat: assistant persona and greeting
"""
