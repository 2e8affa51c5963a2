"""Configuration for exercise generation.

These configuration models allow users to tune which exercises are generated
from dictionary entries, such as the number of distractors for translation
questions or whether option order is shuffled.
"""

from pydantic import BaseModel, Field


class NounConfig(BaseModel):
    """Configuration for article and plural exercises."""

    article_choice: bool = True
    plural_type_in: bool = True
    shuffle_options: bool = True


class VocabularyConfig(BaseModel):
    """Configuration for translation and cloze exercises."""

    translation_choice: bool = True
    distractor_count: int = Field(default=2, ge=1, le=5)
    translation_type_in: bool = False
    cloze: bool = True
    shuffle_options: bool = True


class ExerciseGeneratorConfig(BaseModel):
    """Master configuration for all generated exercise types."""

    nouns: NounConfig = Field(default_factory=NounConfig)
    vocabulary: VocabularyConfig = Field(default_factory=VocabularyConfig)
