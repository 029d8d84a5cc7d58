# planforge/planning/schemas/base.py
"""Shared base model for planning schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PlannerModel(BaseModel):
    """Immutable model accepting both snake_case and camelCase keys.

    Remote reasoning output and upstream collaborators speak camelCase;
    Python code uses snake_case. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
