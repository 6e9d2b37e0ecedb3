"""Pydantic schemas for the message API."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class MessageCreate(BaseModel):
    """Schema for posting a message through the JSON API."""

    sender: str
    content: str

    model_config = ConfigDict(extra="forbid")


class MessageOut(BaseModel):
    """Schema for returning a stored message."""

    sender: str
    content: str

    model_config = ConfigDict(from_attributes=True)


class SubmissionOut(BaseModel):
    """Outcome of a submission."""

    status: Literal["accepted", "rate_limited", "rejected"]
    detail: str
