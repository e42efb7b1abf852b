"""Example recognition client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseRecognitionClient and register the provider in RecognizerFactory.
"""

import json
from typing import ClassVar

from prospect_intel.recognition.client_base import BaseRecognitionClient


class ExampleClientAdapter(BaseRecognitionClient):
    """Example adapter that returns a fixed friend-list transcript.

    No network calls and no pixel inspection. Useful for local development,
    tests, and as a template for real vision providers.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "text": (
            "Maria Santos\n23 mutual friends\nMarketing Manager at Tech Corp\n\n"
            "Pedro Reyes\n8 mutual friends\nLives in Makati City"
        ),
        "lines": [
            "Maria Santos",
            "23 mutual friends",
            "Marketing Manager at Tech Corp",
            "",
            "Pedro Reyes",
            "8 mutual friends",
            "Lives in Makati City",
        ],
        "blocks": [
            ["Maria Santos", "23 mutual friends", "Marketing Manager at Tech Corp"],
            ["Pedro Reyes", "8 mutual friends", "Lives in Makati City"],
        ],
        "confidence": 0.9,
    }

    def create_vision_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_png: bytes,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, system_prompt, user_prompt, image_png, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
