"""Base model configuration for configuration models."""

from pydantic import BaseModel, ConfigDict


class ServingBaseModel(BaseModel):
    """Immutable base model.

    Conventions:
    - Field names are lowercase snake_case, raw configuration keys are
      accepted through camelCase aliases
    - Instances are frozen once validated
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )
