import pytest

from prospect_intel.recognition.exceptions import RecognitionValidationError
from prospect_intel.recognition.validator import validate_and_build


def _valid_data() -> dict:
    return {
        "text": "Maria Santos\n23 mutual friends",
        "lines": ["Maria Santos", "23 mutual friends"],
        "blocks": [["Maria Santos", "23 mutual friends"]],
        "confidence": 0.87,
    }


class TestValidateAndBuild:
    def test_valid_payload(self) -> None:
        output = validate_and_build(_valid_data())
        assert output.text.startswith("Maria Santos")
        assert output.lines == ["Maria Santos", "23 mutual friends"]
        assert output.blocks == [["Maria Santos", "23 mutual friends"]]
        assert output.confidence == 0.87

    def test_lines_default_to_split_text(self) -> None:
        data = _valid_data()
        del data["lines"]
        output = validate_and_build(data)
        assert output.lines == ["Maria Santos", "23 mutual friends"]

    def test_blocks_default_to_empty(self) -> None:
        data = _valid_data()
        del data["blocks"]
        assert validate_and_build(data).blocks == []

    def test_string_blocks_are_split(self) -> None:
        data = _valid_data()
        data["blocks"] = ["Maria Santos\n23 mutual friends"]
        assert validate_and_build(data).blocks == [["Maria Santos", "23 mutual friends"]]

    def test_lines_are_stripped(self) -> None:
        data = _valid_data()
        data["lines"] = ["  Maria Santos ", "23 mutual friends\t"]
        assert validate_and_build(data).lines == ["Maria Santos", "23 mutual friends"]

    def test_empty_transcription_is_valid(self) -> None:
        output = validate_and_build({"text": "", "lines": [], "blocks": [], "confidence": 0})
        assert output.text == ""
        assert output.confidence == 0.0

    def test_missing_text_raises(self) -> None:
        data = _valid_data()
        del data["text"]
        with pytest.raises(RecognitionValidationError, match="Missing required field: text"):
            validate_and_build(data)

    def test_non_string_text_raises(self) -> None:
        data = _valid_data()
        data["text"] = 42
        with pytest.raises(RecognitionValidationError, match="'text' must be a string"):
            validate_and_build(data)

    def test_non_list_lines_raises(self) -> None:
        data = _valid_data()
        data["lines"] = "Maria Santos"
        with pytest.raises(RecognitionValidationError, match="'lines' must be a list"):
            validate_and_build(data)

    def test_non_string_line_raises(self) -> None:
        data = _valid_data()
        data["lines"] = ["Maria Santos", 7]
        with pytest.raises(RecognitionValidationError, match="index 1"):
            validate_and_build(data)

    def test_malformed_block_raises(self) -> None:
        data = _valid_data()
        data["blocks"] = [["ok"], {"bad": True}]
        with pytest.raises(RecognitionValidationError, match="Block at index 1"):
            validate_and_build(data)

    def test_missing_confidence_raises(self) -> None:
        data = _valid_data()
        del data["confidence"]
        with pytest.raises(RecognitionValidationError, match="'confidence' must be a number"):
            validate_and_build(data)

    def test_boolean_confidence_raises(self) -> None:
        data = _valid_data()
        data["confidence"] = True
        with pytest.raises(RecognitionValidationError, match="must be a number"):
            validate_and_build(data)

    @pytest.mark.parametrize("value", [-0.1, 1.01, float("nan")])
    def test_out_of_range_confidence_raises(self, value: float) -> None:
        data = _valid_data()
        data["confidence"] = value
        with pytest.raises(RecognitionValidationError, match=r"\[0, 1\]"):
            validate_and_build(data)
