"""
Pydantic schemas for the login notification endpoint.

The login flow in the UI is cosmetic; these models only carry the details
forwarded to the admin notification mail.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class LoginNotification(BaseModel):
    """Details of a simulated login or signup."""
    name: str = Field("User", max_length=200, examples=["Rahul"])
    provider: str = Field(
        ...,
        max_length=100,
        examples=["Google", "GitHub", "Apple", "Credentials"]
    )
    email: Optional[str] = Field(None, max_length=320)
    phone: Optional[str] = Field(None, max_length=32)
    type: Literal["Login", "Signup"] = Field("Login")


class NotifyResponse(BaseModel):
    """Result of the best-effort notification."""
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
