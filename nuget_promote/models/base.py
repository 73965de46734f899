"""Base models for nuget-promote."""

from pydantic import BaseModel, ConfigDict


class PromoteBaseModel(BaseModel):
    """Base model for all nuget-promote models."""

    model_config = ConfigDict(
        extra="forbid",  # Don't allow extra fields
        frozen=False,  # Allow modification (can be changed per model)
        validate_assignment=True,  # Validate on attribute assignment
    )


class FrozenModel(BaseModel):
    """Base model for immutable value objects used as dictionary keys."""

    model_config = ConfigDict(extra="forbid", frozen=True)


__all__ = ["PromoteBaseModel", "FrozenModel"]
