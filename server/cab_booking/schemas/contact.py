"""Contact-form Pydantic schemas."""

from pydantic import BaseModel, Field, field_validator

from .common import StatusMessage


class ContactRequest(BaseModel):
    """Request schema for the contact form. Every field is required and non-blank."""

    name: str = Field(..., min_length=1, max_length=255, description="Sender name")
    email: str = Field(..., min_length=1, max_length=255, description="Sender email")
    phone: str = Field(..., min_length=1, max_length=32, description="Sender phone number")
    subject: str = Field(..., min_length=1, max_length=255, description="Message subject")
    message: str = Field(..., min_length=1, max_length=5000, description="Message body")

    @field_validator("name", "email", "phone", "subject", "message")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field must not be blank")
        return v.strip()


class ContactResponse(StatusMessage):
    """Response schema for the contact form."""
