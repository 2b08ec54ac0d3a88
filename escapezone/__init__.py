"""Escape Zone backend: Gemini-backed recommendations, career advice and chat."""

__version__ = "0.1.0"
