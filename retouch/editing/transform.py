"""
Image Transform - The external generative capability.

The engine only depends on the ImageTransform contract:

    generate(prompt, primary?, reference?, target_size) -> bytes

Zero, one or two images may be passed. The primary image is the
STRUCTURE input and the reference image is the STYLE input; they travel as
separate, labelled inputs and are never merged.

GeminiImageTransform implements the contract with the google-genai SDK.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from google import genai
from google.genai import types

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MODEL = "gemini-3-pro-image-preview"


class TargetSize(str, Enum):
    """Output resolution requested from the backend."""
    QHD_2K = "2K"
    UHD_4K = "4K"


class NoImageProduced(Exception):
    """The backend answered without any image data."""


@dataclass(frozen=True)
class ImageInput:
    data: bytes
    media_type: str


class ImageTransform(ABC):
    """Contract for the generative backend."""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        primary: ImageInput | None = None,
        reference: ImageInput | None = None,
        target_size: TargetSize = TargetSize.QHD_2K,
    ) -> bytes:
        """
        Produce one image.

        Raises:
            NoImageProduced: the backend returned no image
            Exception: any backend/transport failure, propagated as-is
        """


# Builds a transform bound to one access credential
TransformFactory = Callable[[str], ImageTransform]


BLEND_TEMPLATE = """
TASK: Generate a high-resolution {size} architectural image.

INPUTS:
1. [First Image provided]: STRUCTURE REFERENCE.
2. [Second Image provided]: STYLE/ENVIRONMENT REFERENCE.
3. User Instruction: "{prompt}"

STRICT CONSTRAINTS:
- STRUCTURE: You MUST preserve the architectural form, perspective, geometry, and main subject of the First Image. Do not hallucinate a different building shape.
- STYLE: You MUST apply the lighting, color palette, sky, mood, and surrounding landscape style of the Second Image to the First Image.
- OUTPUT: A seamless blend where the building from Image 1 sits naturally in the world of Image 2.
"""


class GeminiImageTransform(ImageTransform):
    """
    ImageTransform backed by a Gemini image model.

    Usage:
        transform = GeminiImageTransform(api_key="...")
        png = transform.generate("Add a pool", primary=ImageInput(data, "image/jpeg"))
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_IMAGE_MODEL,
        timeout_ms: int = 300_000,
    ):
        self.model = model
        self.client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_ms),
        )

    def generate(
        self,
        prompt: str,
        primary: ImageInput | None = None,
        reference: ImageInput | None = None,
        target_size: TargetSize = TargetSize.QHD_2K,
    ) -> bytes:
        response = self.client.models.generate_content(
            model=self.model,
            contents=self.build_parts(prompt, primary, reference, target_size),
            config=types.GenerateContentConfig(
                response_modalities=[types.Modality.TEXT, types.Modality.IMAGE],
                image_config=types.ImageConfig(image_size=target_size.value),
            ),
        )
        return self._extract_image(response)

    @staticmethod
    def build_parts(
        prompt: str,
        primary: ImageInput | None,
        reference: ImageInput | None,
        target_size: TargetSize = TargetSize.QHD_2K,
    ) -> list[types.Part]:
        """
        Text first, then the structure image, then the style image.

        With both images present the instruction is wrapped so the model
        knows which image plays which role.
        """
        text = prompt
        if primary and reference:
            text = BLEND_TEMPLATE.format(size=target_size.value, prompt=prompt)

        parts = [types.Part.from_text(text=text)]
        if primary:
            parts.append(types.Part.from_bytes(data=primary.data, mime_type=primary.media_type))
        if reference:
            parts.append(types.Part.from_bytes(data=reference.data, mime_type=reference.media_type))
        return parts

    @staticmethod
    def _extract_image(response) -> bytes:
        for candidate in response.candidates or []:
            if not candidate.content or not candidate.content.parts:
                continue
            for part in candidate.content.parts:
                if part.inline_data and part.inline_data.data:
                    return part.inline_data.data

        raise NoImageProduced("No image generated.")


def gemini_transform_factory(model: str = DEFAULT_IMAGE_MODEL) -> TransformFactory:
    """Factory that builds a Gemini transform per access credential."""
    def build(api_key: str) -> ImageTransform:
        return GeminiImageTransform(api_key=api_key, model=model)
    return build
