"""Shared Pydantic types for user and follow models."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

UserId = Annotated[int, Field(description="Caller-supplied user identifier")]
"""Caller-supplied integer user identifier (never generated by the store)."""

Username = Annotated[str, Field(description="Display name")]
"""Display name. Uniqueness is not enforced."""
