"""OpenAI Responses API client for meal image recognition."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from nutrition_ai.services.vision import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout: float = 60.0) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        return cls(client=AsyncOpenAI(api_key=api_key, timeout=timeout))

    async def complete(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        prompt: str,
    ) -> str:
        """Send the prompt and image, returning the reply text."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {"type": "input_image", "image_url": image_data_url},
                    ],
                }
            ],
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
