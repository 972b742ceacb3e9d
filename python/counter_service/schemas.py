"""Pydantic schemas for API responses."""

from pydantic import BaseModel


class CounterResponse(BaseModel):
    """Counter response schema."""

    value: int

    model_config = {"from_attributes": True}
