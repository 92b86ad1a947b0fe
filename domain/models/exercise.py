"""
Exercise catalog entity.

An Exercise is referenced by diary entries, preset exercises and plan
assignments. Global exercises have no owner; custom exercises belong to the
user who created them and may be shared with everyone.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.converters.json_arrays import parse_json_array


class Exercise(BaseModel):
    """
    An exercise definition from the catalog.

    equipment, primary_muscles, secondary_muscles, instructions and images
    are always lists of strings. Stored values that cannot be parsed become
    empty lists instead of failing the read.

    Examples:
        >>> ex = Exercise(id="e1", name="Push-up", category="strength",
        ...               equipment='["none"]')
        >>> ex.equipment
        ['none']
    """

    id: str = Field(..., description="Exercise ID (UUID)")
    name: str = Field(..., min_length=1, description="Display name")

    # External catalog origin, e.g. an imported dataset
    source: Optional[str] = Field(default=None, description="Catalog origin")
    source_id: Optional[str] = Field(default=None, description="ID within the origin")

    # Taxonomy
    force: Optional[str] = None
    level: Optional[str] = Field(
        default=None, description="beginner, intermediate or expert"
    )
    mechanic: Optional[str] = None
    category: Optional[str] = Field(
        default=None, description="e.g. strength, cardio, stretching"
    )

    equipment: List[str] = Field(default_factory=list)
    primary_muscles: List[str] = Field(default_factory=list)
    secondary_muscles: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)

    calories_per_hour: Optional[float] = Field(
        default=None, ge=0, description="Stored calorie burn rate"
    )
    description: Optional[str] = None

    # Ownership
    user_id: Optional[str] = Field(
        default=None, description="Owner; None for global exercises"
    )
    is_custom: bool = False
    shared_with_public: bool = False

    @field_validator(
        "equipment",
        "primary_muscles",
        "secondary_muscles",
        "instructions",
        "images",
        mode="before",
    )
    @classmethod
    def parse_arrays(cls, value, info):
        return parse_json_array(value, field=info.field_name)

    def is_visible_to(self, user_id: str) -> bool:
        """Global, shared and own exercises are visible."""
        return self.user_id is None or self.shared_with_public or self.user_id == user_id

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id is not None and self.user_id == user_id
