"""
Editing Module - The working image, its history and the edit pipeline.

- HistoryStack: linear undo/redo over immutable ImageVersions
- ReferenceSlot: optional style image, independent of history
- EditOrchestrator: builds one transform call and appends its result
- ImageTransform: contract for the generative backend
- PROMPT_PRESETS: ready-made scene prompts
"""

from .history import HistoryStack, ImageVersion
from .reference import ReferenceSlot, ReferenceImage
from .transform import (
    ImageTransform,
    ImageInput,
    TargetSize,
    NoImageProduced,
    GeminiImageTransform,
    gemini_transform_factory,
)
from .orchestrator import (
    EditOrchestrator,
    effective_prompt,
    DEFAULT_REFERENCE_INSTRUCTION,
    UPSCALE_INSTRUCTION,
)
from .styles import IMAGE_STYLES, apply_style
from .presets import PROMPT_PRESETS, PromptPreset, preset_prompt

__all__ = [
    "HistoryStack",
    "ImageVersion",
    "ReferenceSlot",
    "ReferenceImage",
    "ImageTransform",
    "ImageInput",
    "TargetSize",
    "NoImageProduced",
    "GeminiImageTransform",
    "gemini_transform_factory",
    "EditOrchestrator",
    "effective_prompt",
    "DEFAULT_REFERENCE_INSTRUCTION",
    "UPSCALE_INSTRUCTION",
    "IMAGE_STYLES",
    "apply_style",
    "PROMPT_PRESETS",
    "PromptPreset",
    "preset_prompt",
]
