from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ProviderKind(str, Enum):
	hf = 'hf'
	messages = 'messages'
	openai = 'openai'


DEFAULT_MODEL_IDS = {
    ProviderKind.hf: 'meta-llama/Meta-Llama-3-8B-Instruct',
    ProviderKind.messages: 'claude-3-5-haiku-latest',
    ProviderKind.openai: 'gpt-4o-mini',
}

DEFAULT_BASE_URLS = {
    ProviderKind.hf: 'https://api-inference.huggingface.co',
    ProviderKind.messages: 'https://api.anthropic.com',
    ProviderKind.openai: None,
}


class ProviderConfig(BaseModel):
	model_config = ConfigDict(protected_namespaces=())

	kind: ProviderKind = Field(ProviderKind.hf, description='Which inference backend to use')
	model_id: Optional[str] = Field(None, description='The model to request. Defaults to a per-backend model.')
	base_url: Optional[str] = Field(None, description='Base URL of the inference API. Defaults to the public endpoint of the backend.')
	api_key: Optional[str] = Field(None, description='Bearer token or API key. Read from the environment, never from the config file.', exclude=True)
	max_new_tokens: int = Field(512, description='Maximum number of tokens to generate', gt=0)
	temperature: float = Field(0.7, description='Sampling temperature', ge=0.0)
	top_p: float = Field(0.9, description='Nucleus sampling threshold', gt=0.0, le=1.0)
	request_timeout_seconds: Optional[float] = Field(None, description='Request timeout. Unset uses the HTTP client default.', gt=0)

	def resolved_model_id(self) -> str:
		return self.model_id or DEFAULT_MODEL_IDS[self.kind]

	def resolved_base_url(self) -> Optional[str]:
		return (self.base_url or DEFAULT_BASE_URLS[self.kind] or '').rstrip('/') or None
