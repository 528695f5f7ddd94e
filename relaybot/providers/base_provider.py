from abc import ABC, abstractmethod
import json
from typing import Any, Sequence

import httpx

from relaybot.history import Turn
from relaybot.log_config import logger
from relaybot.providers.results import Failure, FailureKind, InferenceResult, upstream_error
from relaybot.pydantic_models.provider_config import ProviderConfig


class BaseProvider(ABC):
	def __init__(self, config: ProviderConfig, system_prompt: str):
		self.config = config
		self.model = config.resolved_model_id()
		self.system_prompt = system_prompt

	@abstractmethod
	async def complete(self, turns: Sequence[Turn]) -> InferenceResult:
		"""Send the conversation to the backend and return its reply or a typed failure."""

	async def aclose(self):
		pass


class HttpProvider(BaseProvider):
	"""Backend reached with a single JSON POST per completion.

	Subclasses build the request and interpret the response; this class owns
	the shared connection pool and turns transport errors into failures.
	"""

	def __init__(self, config: ProviderConfig, system_prompt: str, http_client: httpx.AsyncClient | None = None):
		super().__init__(config, system_prompt)
		base_url = config.resolved_base_url()
		if base_url is None:
			raise ValueError(f"No base URL for the '{config.kind.value}' backend")
		self.base_url = base_url
		if http_client is None:
			if config.request_timeout_seconds is not None:
				http_client = httpx.AsyncClient(timeout=config.request_timeout_seconds)
			else:
				http_client = httpx.AsyncClient()
		self.http_client = http_client

	@abstractmethod
	def endpoint(self) -> str:
		pass

	@abstractmethod
	def headers(self) -> dict[str, str]:
		pass

	@abstractmethod
	def build_payload(self, turns: Sequence[Turn]) -> dict[str, Any]:
		pass

	@abstractmethod
	def interpret_response(self, status_code: int, body: str) -> InferenceResult:
		pass

	async def complete(self, turns: Sequence[Turn]) -> InferenceResult:
		payload = self.build_payload(turns)
		logger.debug(f"POST {self.endpoint()} ({len(turns)} turns)")
		try:
			response = await self.http_client.post(self.endpoint(), headers=self.headers(), json=payload)
		except httpx.HTTPError as e:
			return Failure(FailureKind.UPSTREAM_ERROR, f"{type(e).__name__}: {e}")
		return self.interpret_response(response.status_code, response.text)

	async def aclose(self):
		await self.http_client.aclose()


def is_success_status(status_code: int) -> bool:
	return 200 <= status_code < 300


def parse_json_body(status_code: int, body: str) -> tuple[Any, Failure | None]:
	"""Decode a response body, or describe why it cannot be used."""
	try:
		return json.loads(body), None
	except ValueError:
		if is_success_status(status_code):
			return None, Failure(FailureKind.UPSTREAM_ERROR, f"Malformed response body: {body[:200]}")
		return None, upstream_error(status_code, body)
