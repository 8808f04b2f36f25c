"""
Prompt construction for description generation.

Sections are emitted only when the request carries them.
"""

from typing import Optional

from .models import DescriptionRequest

CLOSING_INSTRUCTION = (
    "The description should be engaging, highlight the key benefits, "
    "and be optimized for e-commerce."
)


def build_description_prompt(request: DescriptionRequest) -> str:
    prompt = f'Write a compelling product description for "{request.product_name}".\n\n'

    if request.features:
        prompt += "Key Features/Benefits:\n"
        for feature in request.features:
            prompt += f"- {feature}\n"
        prompt += "\n"

    if request.target_audience:
        prompt += f"Target Audience: {request.target_audience}\n\n"

    if request.tone:
        prompt += f"Tone: {request.tone}\n\n"

    if request.keywords:
        prompt += f"Keywords to include: {', '.join(request.keywords)}\n\n"

    if request.category:
        prompt += f"Product Category: {request.category}\n\n"

    if request.brand_profile:
        prompt += f"Brand Voice: {request.brand_profile.description}\n"
        if request.brand_profile.tone:
            prompt += f"Brand Tone: {request.brand_profile.tone}\n"
        prompt += "\n"

    return prompt + CLOSING_INSTRUCTION


def build_regeneration_prompt(previous_description: str, feedback: Optional[str] = None) -> str:
    prompt = (
        "Rewrite the following product description to make it more compelling "
        f"and engaging:\n\n{previous_description}\n\n"
    )
    if feedback:
        prompt += f"Consider this feedback: {feedback}\n\n"
    return prompt
