"""
Blog API Backend - Blog Request/Response Schemas
=================================================

What:  Declared shapes for the /posts endpoints and the Blog JSON form.
How:   Request models validate untrusted bodies; response models read the
       ORM objects (from_attributes) and serialize with camelCase aliases
       (`userId`, `blogId`, `transactionResult`).

Blog JSON:
    {
        "id": 1,
        "title": "Hi",
        "body": "World",
        "userId": 1,
        "tag": {"id": 1, "tag": ["go"], "blogId": 1}
    }
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreateBlogRequest(BaseModel):
    """Body of POST /posts. All fields required."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=3, max_length=255)
    # Strict: "1" or true are rejected rather than coerced
    user_id: StrictInt = Field(..., alias="userId")
    body: str = Field(..., min_length=3)
    tags: List[str]


class UpdateBlogRequest(BaseModel):
    """
    Body of PUT /posts/{id}.

    Every field is optional; a field that is present is validated with the
    same rule as on create. Absent fields are left unchanged; an explicit
    null is rejected.
    """

    title: Optional[str] = Field(default=None, min_length=3, max_length=255)
    body: Optional[str] = Field(default=None, min_length=3)
    tags: Optional[List[str]] = None

    # Runs only for keys present in the body; omitted keys keep the default
    @field_validator("title", "body", "tags")
    @classmethod
    def reject_explicit_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class TagsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tag: List[str]
    blog_id: int = Field(serialization_alias="blogId")


class BlogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    body: str
    user_id: int = Field(serialization_alias="userId")
    tag: Optional[TagsResponse] = None


class BlogEnvelope(BaseModel):
    """`{"blog": ...}`, returned by PUT /posts/{id}."""
    blog: BlogResponse


class CreateBlogResponse(BaseModel):
    """`{"transactionResult": {"blog": ...}}`, returned by POST /posts."""
    transaction_result: BlogEnvelope = Field(serialization_alias="transactionResult")
