from typing import Any, Sequence
import httpx
from openai import APIError, APIStatusError, AsyncOpenAI
from openai.types.chat import ChatCompletion
from relaybot.history import Turn
from relaybot.prompt_format import build_chat_messages
from relaybot.providers.base_provider import BaseProvider
from relaybot.providers.results import Failure, FailureKind, InferenceResult, Success, mentions_loading, upstream_error
from relaybot.pydantic_models.provider_config import ProviderConfig
from relaybot.log_config import logger


def log_token_usage(completion: ChatCompletion):
	usage = completion.usage
	if not usage:
		logger.debug("No token usage information available.")
		return
	logger.debug(f"Token usage: {usage.prompt_tokens} input tokens, {usage.completion_tokens} output tokens")


class OpenAIProvider(BaseProvider):
	def __init__(self, config: ProviderConfig, system_prompt: str, http_client: httpx.AsyncClient | None = None):
		super().__init__(config, system_prompt)
		client_args: dict[str, Any] = {
		    'api_key': config.api_key,
		    'base_url': config.resolved_base_url(),
		    'max_retries': 0,
		    'http_client': http_client,
		}
		if config.request_timeout_seconds is not None:
			client_args['timeout'] = config.request_timeout_seconds
		self.client = AsyncOpenAI(**client_args)

	async def complete(self, turns: Sequence[Turn]) -> InferenceResult:
		messages: list[Any] = [{"role": 'system', "content": self.system_prompt}]
		messages.extend(build_chat_messages(turns))
		try:
			completion = await self.client.chat.completions.create(
			    model=self.model,
			    messages=messages,
			    max_tokens=self.config.max_new_tokens,
			    temperature=self.config.temperature,
			    top_p=self.config.top_p,
			)
		except APIStatusError as e:
			if mentions_loading(e.message):
				return Failure(FailureKind.MODEL_LOADING, e.message)
			return upstream_error(e.status_code, e.response.text)
		except APIError as e:
			return Failure(FailureKind.UPSTREAM_ERROR, f"{type(e).__name__}: {e.message}")
		log_token_usage(completion)

		if not completion.choices:
			return Failure(FailureKind.EMPTY_RESPONSE, "No choices returned")
		text = completion.choices[0].message.content
		if not text:
			return Failure(FailureKind.EMPTY_RESPONSE, "Empty message content")
		return Success(text)

	async def aclose(self):
		await self.client.close()
