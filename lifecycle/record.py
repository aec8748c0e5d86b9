"""Lifecycle record data model for published model retirement schedules."""

from dataclasses import dataclass
from enum import Enum


class ModelType(str, Enum):
    """Model categories, derived from the section a record was published under."""

    TEXT_GENERATION = "text_generation"
    AUDIO = "audio"
    IMAGE_OR_VIDEO = "image_or_video"
    EMBEDDING = "embedding"
    OTHER = "other"


# Exact heading text -> category. Anything else is OTHER.
SECTION_MODEL_TYPES = {
    "Text generation": ModelType.TEXT_GENERATION,
    "Audio": ModelType.AUDIO,
    "Image and video": ModelType.IMAGE_OR_VIDEO,
    "Image generation": ModelType.IMAGE_OR_VIDEO,
    "Video generation": ModelType.IMAGE_OR_VIDEO,
    "Embedding": ModelType.EMBEDDING,
    "Embeddings": ModelType.EMBEDDING,
}

# Headings that open a lifecycle section
KNOWN_SECTIONS = frozenset(SECTION_MODEL_TYPES) | {"Fine-tuned models", "Other"}


def model_type_for_section(section: str) -> ModelType:
    """Map a section heading to its model category."""
    return SECTION_MODEL_TYPES.get(section, ModelType.OTHER)


@dataclass(frozen=True)
class LifecycleRecord:
    """One published row of a model/version lifecycle table.

    An empty ``version`` means the row applies to all versions of the model.
    ``section`` keeps the heading text the row appeared under, which is the
    only way to tell two ``OTHER`` categories apart.
    """

    model_type: ModelType
    model_name: str
    version: str = ""
    lifecycle_stage: str = ""
    deprecation_date: str = ""
    retirement_date: str = ""
    replacement_model: str = ""
    section: str = ""

    def display_type(self) -> str:
        """Human-readable category."""
        if self.model_type == ModelType.OTHER and self.section:
            return self.section
        return {
            ModelType.TEXT_GENERATION: "Text generation",
            ModelType.AUDIO: "Audio",
            ModelType.IMAGE_OR_VIDEO: "Image and video",
            ModelType.EMBEDDING: "Embedding",
        }.get(self.model_type, "Other")

    def to_dict(self) -> dict:
        return {
            "model_type": self.model_type.value,
            "model_name": self.model_name,
            "version": self.version,
            "lifecycle_stage": self.lifecycle_stage,
            "deprecation_date": self.deprecation_date,
            "retirement_date": self.retirement_date,
            "replacement_model": self.replacement_model,
            "section": self.section,
        }
