import json
import logging
from typing import Any, Dict

from openai import AsyncOpenAI, OpenAIError

from .errors import ConfigurationError, ProviderCallError, SchemaParseError
from .settings import Settings

logger = logging.getLogger(__name__)


class StructuredCaller:
    """Submit instructions + content + schema, get schema-shaped data back or fail."""

    async def call(
        self,
        *,
        instructions: str,
        user: str,
        schema_name: str,
        schema: Dict[str, Any],
        max_tokens: int = 2500,
        temperature: float = 0.5,
    ) -> Dict[str, Any]:
        raise NotImplementedError


class OpenAIStructuredCaller(StructuredCaller):
    def __init__(self, settings: Settings, client=None):
        self.settings = settings
        self._client = client

    def _get_client(self):
        if self._client is None:
            if not self.settings.has_key():
                raise ConfigurationError("OPENAI_API_KEY is not set; please configure your .env")
            self._client = AsyncOpenAI(api_key=self.settings.openai_api_key)
        return self._client

    async def call(
        self,
        *,
        instructions: str,
        user: str,
        schema_name: str,
        schema: Dict[str, Any],
        max_tokens: int = 2500,
        temperature: float = 0.5,
    ) -> Dict[str, Any]:
        model = self.settings.openai_model
        logger.info(f"Calling OpenAI API ({model}) for schema '{schema_name}'")
        client = self._get_client()
        try:
            resp = await client.responses.create(
                model=model,
                instructions=instructions,
                input=[{"role": "user", "content": user}],
                temperature=temperature,
                max_output_tokens=max_tokens,
                store=False,
                text={
                    "format": {
                        "type": "json_schema",
                        "name": schema_name,
                        "strict": True,
                        "schema": schema,
                    }
                },
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API call failed for '{schema_name}': {str(e)}")
            raise ProviderCallError(f"OpenAI call for '{schema_name}' failed: {e}") from e

        usage = getattr(resp, "usage", None)
        if usage is not None:
            logger.info(
                f"[LLM] {model} {schema_name} in={getattr(usage, 'input_tokens', '?')} "
                f"out={getattr(usage, 'output_tokens', '?')}"
            )

        text = getattr(resp, "output_text", None) or ""
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Response for '{schema_name}' is not valid JSON ({len(text)} chars)")
            raise SchemaParseError(f"OpenAI returned invalid JSON for '{schema_name}': {e}") from e
