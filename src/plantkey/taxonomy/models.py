"""Reference data models for species records and the trait vocabulary.

Field aliases are the keys of the bundled JSON files, so the models validate the raw
records directly.
"""

from collections.abc import Callable
from operator import attrgetter

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from plantkey.taxonomy.categories import TraitCategory


class Species(BaseModel):
    """Immutable species record with nullable trait attributes.

    A ``None`` trait means the category is not documented for this species.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    scientific_name: str = Field(..., alias="Plant_Name_Latin", min_length=1)
    common_name: str = Field("", alias="Plant_Name_Common")
    family: str = Field("", alias="Plant_Family")
    genus: str = Field("", alias="Plant_Genus")
    order: str = Field("", alias="Plant_Order")
    taxonomic_class: str = Field("", alias="Plant_Class")
    kingdom: str = Field("Plantae", alias="Plant_Kingdom")
    description: str = Field("", alias="Plant_Description")
    is_free: bool = False

    # Leaf traits
    leaf_type: str | None = Field(None, alias="Leaf_Type")
    leaf_attachment: str | None = Field(None, alias="Leaf_Attachment")
    leaf_arrangement: str | None = Field(None, alias="Leaf_Arrangement")
    leaf_shape: str | None = Field(None, alias="Leaf_Shape")
    leaf_margin: str | None = Field(None, alias="Leaf_Margin")
    leaf_apex: str | None = Field(None, alias="Leaf_Apex")
    leaf_base: str | None = Field(None, alias="Leaf_Base")
    leaf_venation: str | None = Field(None, alias="Leaf_Venation")
    leaf_texture: str | None = Field(None, alias="Leaf_Texture")
    leaf_stipules: str | None = Field(None, alias="Leaf_Stipules")

    # Stem traits
    stem_habit: str | None = Field(None, alias="Stem_Habit")
    stem_structure: str | None = Field(None, alias="Stem_Structure")
    stem_branching: str | None = Field(None, alias="Stem_Branching")

    # Flower traits
    flower_inflorescence: str | None = Field(None, alias="Flower_Inflorescence")
    flower_symmetry: str | None = Field(None, alias="Flower_Symmetry")
    flower_petal_count: str | None = Field(None, alias="Flower_Petal Count")
    flower_petal_fusion: str | None = Field(None, alias="Flower_Petal Fusion")
    flower_sepal_presence: str | None = Field(None, alias="Flower_Sepal Presence")
    flower_sepal_fusion: str | None = Field(None, alias="Flower_Sepal Fusion")
    flower_color: str | None = Field(None, alias="Flower_Color")
    flower_position: str | None = Field(None, alias="Flower_Position")
    flower_ovary_position: str | None = Field(None, alias="Flower_Ovary Position")
    flower_sexuality: str | None = Field(None, alias="Flower_Sexuality")
    flower_floral_part: str | None = Field(None, alias="Flower_Floral Part")

    # Fruit traits
    fruit_type: str | None = Field(None, alias="Fruit_Type")
    fruit_seed_trait: str | None = Field(None, alias="Fruit_Seed Trait")

    # Root traits
    root_type: str | None = Field(None, alias="Root_Type")

    # Environment
    environment_habitat: str | None = Field(None, alias="Environment_Habitat")
    environment_soil: str | None = Field(None, alias="Environment_Soil")
    environment_growth_habit: str | None = Field(None, alias="Environment_Growth Habit")

    @field_validator(*(category.attribute_name for category in TraitCategory), mode="before")
    @classmethod
    def blank_trait_is_missing(cls, v: object) -> object:
        """Treat empty trait strings as undocumented."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator(
        "common_name", "family", "genus", "order", "taxonomic_class", "description", mode="before"
    )
    @classmethod
    def null_name_is_empty(cls, v: object) -> object:
        return "" if v is None else v

    def trait(self, category: TraitCategory | str) -> str | None:
        """Return this species' value for a trait category."""
        return trait_accessor(category)(self)

    def __str__(self) -> str:
        """Return string representation for debugging."""
        return f"{self.common_name} ({self.scientific_name})"


_ACCESSORS: dict[TraitCategory, Callable[[Species], str | None]] = {
    category: attrgetter(category.attribute_name) for category in TraitCategory
}


def trait_accessor(category: TraitCategory | str) -> Callable[[Species], str | None]:
    """Return the attribute accessor for a trait category.

    Raises:
        ValueError: If the category key is not a known trait category
    """
    return _ACCESSORS[TraitCategory(category)]


class TraitTerm(BaseModel):
    """A controlled-vocabulary term within a trait category."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    term: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    description_short: str = Field("", alias="descriptionShort")
    description_long: str = Field("", alias="descriptionLong")
    image_url: str | None = Field(None, alias="imageURL")
    show_plant_id: bool = Field(False, alias="showPlantID")
    is_free: bool = Field(False, alias="isFree")

    @field_validator("description_short", "description_long", "is_free", mode="before")
    @classmethod
    def null_to_default(cls, v: object, info: ValidationInfo) -> object:
        """Accept explicit nulls for optional descriptive fields."""
        if v is None:
            return False if info.field_name == "is_free" else ""
        return v
