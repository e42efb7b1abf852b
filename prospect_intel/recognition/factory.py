from typing import ClassVar

from prospect_intel.config.settings import Settings
from prospect_intel.recognition.base import BaseRecognizer
from prospect_intel.recognition.example_client_adapter import ExampleClientAdapter
from prospect_intel.recognition.openai_client_adapter import OpenAIClientAdapter
from prospect_intel.recognition.recognizer import VisionRecognizer


class RecognizerFactory:
    """Creates the configured recognizer adapter."""

    SUPPORTED_PROVIDERS: ClassVar[tuple[str, ...]] = ("example", "openai")

    @classmethod
    def create(cls, settings: Settings) -> BaseRecognizer:
        """Create a configured recognizer from application settings."""
        provider = settings.recognition_provider.lower()
        if provider == "example":
            return VisionRecognizer(client=ExampleClientAdapter(), model="example")
        if provider == "openai":
            client = OpenAIClientAdapter(
                api_key=settings.recognition_openai_api_key,
                timeout_seconds=settings.recognition_openai_timeout_seconds,
                base_url=(settings.recognition_openai_base_url or "").strip() or None,
            )
            return VisionRecognizer(
                client=client,
                model=settings.recognition_openai_model_name,
            )
        raise ValueError(
            f"Unknown recognition provider '{provider}'. "
            f"Choose from: {list(cls.SUPPORTED_PROVIDERS)}"
        )
