import base64

import httpx
import openai

from prospect_intel.recognition.client_base import BaseRecognitionClient
from prospect_intel.recognition.exceptions import RecognitionError, RecognitionNetworkError


class OpenAIClientAdapter(BaseRecognitionClient):
    """Recognition client adapter built on the OpenAI-compatible vision chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_vision_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_png: bytes,
        json_schema: dict[str, object],
    ) -> str:
        image_url = "data:image/png;base64," + base64.b64encode(image_png).decode("ascii")
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=0.0,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "recognition_result",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": user_prompt},
                            {"type": "image_url", "image_url": {"url": image_url}},
                        ],
                    },
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise RecognitionNetworkError(
                f"Recognition provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise RecognitionNetworkError(
                f"Recognition provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise RecognitionError("Recognition provider returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise RecognitionError("Recognition provider returned empty response")
        return content
