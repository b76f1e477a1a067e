"""
Blog API Backend - Auth Request/Response Schemas
=================================================

What:  Declared shapes for POST /signup and POST /signin.
How:   FastAPI validates request bodies against these before the handler
       runs; any violation is rendered as a 400 by the global handler.
"""

from pydantic import BaseModel, EmailStr, Field


class SignUpRequest(BaseModel):
    """Body of POST /signup. All fields required."""
    name: str = Field(..., min_length=3, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class SignInRequest(BaseModel):
    """Body of POST /signin. All fields required."""
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class TokenResponse(BaseModel):
    """Issued bearer token; send it back verbatim in the Authorization header."""
    token: str = Field(description="Signed bearer token")
    message: str = Field(description="Human-readable outcome")
