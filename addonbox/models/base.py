"""Base model for all addonbox Pydantic models."""

from pydantic import BaseModel, ConfigDict


class AddonboxBaseModel(BaseModel):
    """Base model class for all addonbox Pydantic models.

    Assignments are validated, so results can be filled in step by step.
    """

    model_config = ConfigDict(
        extra="allow",
        str_strip_whitespace=True,
        use_enum_values=True,
        validate_assignment=True,
        populate_by_name=True,
    )
