"""Trait category keys shared by the question catalog, species records and vocabulary.

The string values are the keys used in the bundled reference JSON; renaming one means
renaming it in the data files too.
"""

from enum import Enum


class TraitGroup(str, Enum):
    """Morphological group a trait category belongs to."""

    LEAF = "leaf"
    STEM = "stem"
    FLOWER = "flower"
    FRUIT = "fruit"
    ROOT = "root"
    ENVIRONMENT = "environment"


class TraitCategory(str, Enum):
    """Named axis of botanical variation."""

    LEAF_TYPE = "Leaf_Type"
    LEAF_ATTACHMENT = "Leaf_Attachment"
    LEAF_ARRANGEMENT = "Leaf_Arrangement"
    LEAF_SHAPE = "Leaf_Shape"
    LEAF_MARGIN = "Leaf_Margin"
    LEAF_APEX = "Leaf_Apex"
    LEAF_BASE = "Leaf_Base"
    LEAF_VENATION = "Leaf_Venation"
    LEAF_TEXTURE = "Leaf_Texture"
    LEAF_STIPULES = "Leaf_Stipules"

    STEM_HABIT = "Stem_Habit"
    STEM_STRUCTURE = "Stem_Structure"
    STEM_BRANCHING = "Stem_Branching"

    FLOWER_INFLORESCENCE = "Flower_Inflorescence"
    FLOWER_SYMMETRY = "Flower_Symmetry"
    FLOWER_PETAL_COUNT = "Flower_Petal Count"
    FLOWER_PETAL_FUSION = "Flower_Petal Fusion"
    FLOWER_SEPAL_PRESENCE = "Flower_Sepal Presence"
    FLOWER_SEPAL_FUSION = "Flower_Sepal Fusion"
    FLOWER_COLOR = "Flower_Color"
    FLOWER_POSITION = "Flower_Position"
    FLOWER_OVARY_POSITION = "Flower_Ovary Position"
    FLOWER_SEXUALITY = "Flower_Sexuality"
    FLOWER_FLORAL_PART = "Flower_Floral Part"

    FRUIT_TYPE = "Fruit_Type"
    FRUIT_SEED_TRAIT = "Fruit_Seed Trait"

    ROOT_TYPE = "Root_Type"

    ENVIRONMENT_HABITAT = "Environment_Habitat"
    ENVIRONMENT_SOIL = "Environment_Soil"
    ENVIRONMENT_GROWTH_HABIT = "Environment_Growth Habit"

    @property
    def group(self) -> TraitGroup:
        """Return the morphological group, derived from the key prefix."""
        return TraitGroup(self.value.split("_", 1)[0].lower())

    @property
    def attribute_name(self) -> str:
        """Return the species model attribute holding this category."""
        return self.name.lower()
