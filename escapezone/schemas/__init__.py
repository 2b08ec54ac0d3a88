"""
Pydantic schemas for API request and response validation.

All FastAPI endpoints use explicit Pydantic models.
"""
