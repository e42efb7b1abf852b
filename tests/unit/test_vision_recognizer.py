import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from prospect_intel.imaging.models import NormalizedImage
from prospect_intel.recognition.client_base import BaseRecognitionClient
from prospect_intel.recognition.example_client_adapter import ExampleClientAdapter
from prospect_intel.recognition.exceptions import RecognitionError, RecognitionValidationError
from prospect_intel.recognition.recognizer import VisionRecognizer


def _make_recognizer(response: str) -> tuple[VisionRecognizer, MagicMock]:
    client = MagicMock(spec=BaseRecognitionClient)
    client.create_vision_completion.return_value = response
    return VisionRecognizer(client=client, model="vision-model"), client


class TestVisionRecognizerWithExampleAdapter:
    def test_returns_example_transcript(self, normalized_image: NormalizedImage) -> None:
        recognizer = VisionRecognizer(client=ExampleClientAdapter(), model="example")
        output = recognizer.recognize(normalized_image)
        assert output.lines[0] == "Maria Santos"
        assert len(output.blocks) == 2
        assert output.confidence == 0.9

    def test_example_adapter_returns_json(self) -> None:
        raw = ExampleClientAdapter().create_vision_completion(
            model="example",
            system_prompt="s",
            user_prompt="u",
            image_png=b"",
            json_schema={},
        )
        assert json.loads(raw)["confidence"] == 0.9


class TestVisionRecognizer:
    def test_sends_png_and_formatted_prompt(self, normalized_image: NormalizedImage) -> None:
        recognizer, client = _make_recognizer('{"text": "", "confidence": 0}')
        recognizer.recognize(normalized_image)

        kwargs = client.create_vision_completion.call_args.kwargs
        assert kwargs["model"] == "vision-model"
        assert kwargs["image_png"].startswith(b"\x89PNG")
        assert "slice 0 of image img-1" in kwargs["user_prompt"]
        assert "30x20" in kwargs["user_prompt"]
        assert kwargs["json_schema"]["required"] == ["text", "lines", "blocks", "confidence"]

    def test_strips_markdown_fences(self, normalized_image: NormalizedImage) -> None:
        fenced = '```json\n{"text": "Ana Cruz", "confidence": 0.7}\n```'
        recognizer, _ = _make_recognizer(fenced)
        output = recognizer.recognize(normalized_image)
        assert output.lines == ["Ana Cruz"]
        assert output.confidence == 0.7

    def test_invalid_json_raises(self, normalized_image: NormalizedImage) -> None:
        recognizer, _ = _make_recognizer("not json")
        with pytest.raises(RecognitionError, match="Invalid JSON"):
            recognizer.recognize(normalized_image)

    def test_non_object_json_raises(self, normalized_image: NormalizedImage) -> None:
        recognizer, _ = _make_recognizer("[1, 2]")
        with pytest.raises(RecognitionError, match="must be an object"):
            recognizer.recognize(normalized_image)

    def test_contract_violation_raises(self, normalized_image: NormalizedImage) -> None:
        recognizer, _ = _make_recognizer('{"text": "x", "confidence": 3}')
        with pytest.raises(RecognitionValidationError):
            recognizer.recognize(normalized_image)

    def test_client_error_propagates(self, normalized_image: NormalizedImage) -> None:
        client = MagicMock(spec=BaseRecognitionClient)
        client.create_vision_completion.side_effect = RecognitionError("provider down")
        recognizer = VisionRecognizer(client=client, model="m")
        with pytest.raises(RecognitionError, match="provider down"):
            recognizer.recognize(normalized_image)

    def test_custom_prompt_template(self, tmp_path: Path, normalized_image: NormalizedImage) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("Read {image_id}")
        client = MagicMock(spec=BaseRecognitionClient)
        client.create_vision_completion.return_value = '{"text": "", "confidence": 0}'
        recognizer = VisionRecognizer(client=client, model="m", prompt_template_path=template)
        recognizer.recognize(normalized_image)
        assert client.create_vision_completion.call_args.kwargs["user_prompt"] == "Read img-1"
