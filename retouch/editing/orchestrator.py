"""
Edit Orchestrator - Turns user intent into one transform call and folds
the result into the history.

Flow for generate():
1. Require an access credential
2. Pick the effective prompt (refine prompt once an edit exists)
3. Fall back to the default blend instruction if only a reference is set
4. Call the transform with the current version and the reference image
5. Append the result

Any failure leaves history and reference untouched. Nothing is retried.
Session validation happens before the orchestrator is reached.
"""

from __future__ import annotations
import logging

from ..errors import MissingAccessCredential, MissingInput, TransformFailed
from .history import HistoryStack, ImageVersion
from .reference import ReferenceSlot
from .transform import ImageInput, NoImageProduced, TargetSize, TransformFactory

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_INSTRUCTION = (
    "Apply the style, lighting, and atmosphere of the reference image to the main image."
)
UPSCALE_INSTRUCTION = (
    "Upscale this image to 4K resolution, enhancing details while preserving "
    "the original composition and style."
)
GENERATED_MEDIA_TYPE = "image/png"


def effective_prompt(history: HistoryStack, prompt: str, refine_prompt: str) -> str:
    """
    The refine prompt wins once at least one edit has been applied.

    Both prompts are stripped; an empty result means "no prompt".
    """
    prompt = (prompt or "").strip()
    refine_prompt = (refine_prompt or "").strip()
    if history.cursor > 0 and refine_prompt:
        return refine_prompt
    return prompt


class EditOrchestrator:
    """
    Coordinates history, reference slot and the transform backend.

    Usage:
        orchestrator = EditOrchestrator(gemini_transform_factory())
        version = orchestrator.generate(history, reference, api_key, "Add a pool")
    """

    def __init__(self, transform_factory: TransformFactory):
        self.transform_factory = transform_factory

    def generate(
        self,
        history: HistoryStack,
        reference: ReferenceSlot,
        api_key: str | None,
        prompt: str = "",
        refine_prompt: str = "",
    ) -> ImageVersion:
        """
        Run one edit and append its result.

        Raises:
            MissingAccessCredential: no API key
            MissingInput: no prompt and no reference image
            TransformFailed: the backend raised or produced no image
        """
        self._require_api_key(api_key)

        prompt_to_send = effective_prompt(history, prompt, refine_prompt)
        if not prompt_to_send:
            if not reference.is_set:
                raise MissingInput()
            prompt_to_send = DEFAULT_REFERENCE_INSTRUCTION

        current = history.current()
        primary = ImageInput(current.data, current.media_type) if current else None
        ref_image = reference.image
        ref_input = ImageInput(ref_image.data, ref_image.media_type) if ref_image else None

        data = self._run(
            api_key,
            prompt_to_send,
            primary=primary,
            reference=ref_input,
            target_size=TargetSize.QHD_2K,
        )

        version = ImageVersion.create(data, GENERATED_MEDIA_TYPE, prefix="gen")
        history.append(version)
        logger.info("Generated version %s (history length %d)", version.id, len(history))
        return version

    def upscale(self, history: HistoryStack, api_key: str | None) -> ImageVersion:
        """
        Upscale the current version to 4K and append it.

        Raises:
            MissingAccessCredential: no API key
            MissingInput: history is empty
            TransformFailed: the backend raised or produced no image
        """
        self._require_api_key(api_key)

        current = history.current()
        if current is None:
            raise MissingInput("There is no image to upscale.")

        data = self._run(
            api_key,
            UPSCALE_INSTRUCTION,
            primary=ImageInput(current.data, current.media_type),
            target_size=TargetSize.UHD_4K,
        )

        version = ImageVersion.create(data, GENERATED_MEDIA_TYPE, prefix="upscale")
        history.append(version)
        logger.info("Upscaled %s to %s", current.id, version.id)
        return version

    def _require_api_key(self, api_key: str | None):
        if not api_key or not api_key.strip():
            raise MissingAccessCredential()

    def _run(
        self,
        api_key: str,
        prompt: str,
        primary: ImageInput | None = None,
        reference: ImageInput | None = None,
        target_size: TargetSize = TargetSize.QHD_2K,
    ) -> bytes:
        try:
            transform = self.transform_factory(api_key)
            data = transform.generate(
                prompt,
                primary=primary,
                reference=reference,
                target_size=target_size,
            )
            if not data:
                raise NoImageProduced("No image generated.")
            return data
        except Exception as e:
            logger.error("Image transform failed: %s", e)
            raise TransformFailed(reason=type(e).__name__) from e
