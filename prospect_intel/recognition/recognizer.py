"""Vision-model text recognizer."""

import json
from pathlib import Path

from prospect_intel.imaging.models import NormalizedImage
from prospect_intel.logging.logger import Log
from prospect_intel.recognition.base import BaseRecognizer
from prospect_intel.recognition.client_base import BaseRecognitionClient
from prospect_intel.recognition.exceptions import RecognitionError
from prospect_intel.recognition.models import RecognitionOutput
from prospect_intel.recognition.prompt_loader import load_json_schema, load_prompt_template
from prospect_intel.recognition.validator import validate_and_build


class VisionRecognizer(BaseRecognizer):
    """Transcribes screenshot slices through a vision-capable chat model."""

    def __init__(
        self,
        *,
        client: BaseRecognitionClient,
        model: str,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "You are a precise OCR engine for social media screenshots.",
    ) -> None:
        self._client = client
        self._model = model
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    def recognize(self, image: NormalizedImage) -> RecognitionOutput:
        prompt = self._prompt_template.format(
            image_id=image.source_image_id,
            slice_index=image.slice_index,
            width=image.width,
            height=image.height,
            json_schema=self._json_schema,
        )
        raw_response = self._client.create_vision_completion(
            model=self._model,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            image_png=image.to_png(),
            json_schema=self._json_schema_dict,
        )
        Log.debug(f"Recognition raw response for {image.source_image_id}:\n{raw_response}")

        output = validate_and_build(self._parse_json(raw_response))
        Log.debug(
            f"Recognized {len(output.lines)} lines in image {image.source_image_id} "
            f"slice {image.slice_index} (confidence {output.confidence:.2f})"
        )
        return output

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise RecognitionError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise RecognitionError("JSON response must be an object")
        return parsed
