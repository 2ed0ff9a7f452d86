"""
Common base model for adapter result records.
"""

from pydantic import BaseModel, ConfigDict


class RecordBaseModel(BaseModel):
    """Base model for records returned by filesystem adapters."""

    model_config = ConfigDict(
        populate_by_name=True,
        # Stream handles and SDK property objects are carried as-is
        arbitrary_types_allowed=True,
        use_enum_values=False,
    )
