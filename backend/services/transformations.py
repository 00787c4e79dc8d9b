"""
Prompt table for the canned transformations.

Each effect maps to the instruction text sent to the image-edit API and to
the short label/description shown by clients.
"""
from typing import Dict, List

from core.errors import InvalidInputError
from models.image_transform import Transformation

PROMPTS: Dict[str, str] = {
    "younger": "Make the person look younger, around 25 years old, professional look, smooth skin, no gray hair",
    "older": "Make the person look older, around 60 years old, with some wrinkles and gray hair",
    "healthier": "Make the person look healthier, with glowing skin, bright eyes, and a healthy complexion",
    "thinner": "Make the person look slightly thinner while maintaining a natural appearance",
}

TRANSFORMATIONS: List[Transformation] = [
    Transformation(name="Younger", effect="younger", description="Make the person look younger, around 25 years old"),
    Transformation(name="Older", effect="older", description="Make the person look older, around 60 years old"),
    Transformation(name="Healthier", effect="healthier", description="Make the person look healthier with glowing skin"),
    Transformation(name="Thinner", effect="thinner", description="Make the person look slightly thinner while maintaining a natural appearance"),
]


def list_transformations() -> List[Transformation]:
    return list(TRANSFORMATIONS)


def get_prompt(transformation: str) -> str:
    """Resolve a transformation name to its prompt, or raise InvalidInputError."""
    if not transformation:
        raise InvalidInputError("No transformation specified")

    prompt = PROMPTS.get(transformation)
    if prompt is None:
        raise InvalidInputError(f'Invalid transformation type: "{transformation}"')
    return prompt
