"""
OpenAI-compatible chat-completion clients for the Hyperbolic and
OpenRouter endpoints.
"""

import json
from typing import Optional

import requests

from .base import LLMClient
from ..cli_display import token_tracker, log
from ..errors import ConfigError


class ChatCompletionClient(LLMClient):

    name = "Chat"
    system_prompt = (
        "You are an assistant helping a developer construct code, follow "
        "instructions carefully and only output the code"
    )
    # Some providers want an explicit ``stream: false``
    send_stream_flag = False

    def __init__(self, base_url: str, model: str, api_key: str,
                 max_tokens: int = 2048, temperature: float = 0.7,
                 top_p: float = 0.9, timeout: int = 300, **kwargs):
        super().__init__(**kwargs)
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.top_p = top_p
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def build_payload(self, prompt: str) -> dict:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "top_p": self.top_p,
        }
        if self.send_stream_flag:
            payload["stream"] = False
        return payload

    def _generate(self, prompt: str) -> Optional[str]:
        payload = self.build_payload(prompt)
        log.debug(f"[{self.name}] Sending request to {self.url}")
        log.debug(f"[{self.name}] Request body:\n{json.dumps(payload, indent=2)}")

        response = requests.post(self.url, headers=self._headers(), json=payload,
                                 timeout=(10, self.timeout))
        log.debug(f"[{self.name}] Response status: {response.status_code}")
        response.raise_for_status()

        body = response.text
        log.debug(f"[{self.name}] Response body: {body}")
        if not body or not body.strip():
            log.warning(f"[{self.name}] Received empty response")
            return None

        data = json.loads(body)
        usage = data.get("usage") or {}
        prompt_tokens = usage.get("prompt_tokens", 0)
        completion_tokens = usage.get("completion_tokens", 0)
        token_tracker.record(
            prompt_tokens if isinstance(prompt_tokens, int) else 0,
            completion_tokens if isinstance(completion_tokens, int) else 0,
        )
        log.debug(f"[{self.name}] Usage: prompt={prompt_tokens} completion={completion_tokens}")

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            log.warning(f"[{self.name}] No message content in response")
            return None
        return content if isinstance(content, str) else None


class HyperbolicClient(ChatCompletionClient):

    name = "Hyperbolic"
    system_prompt = (
        "You are an assistant helping a developer construct code, follow "
        "instructions carefully and only output the code, if you must output "
        "words (you must not) do so inside //"
    )
    send_stream_flag = True


class OpenRouterClient(ChatCompletionClient):

    name = "OpenRouter"


_CLIENTS = {
    "hyperbolic": HyperbolicClient,
    "openrouter": OpenRouterClient,
}


def create_client(provider: str, cfg, model: str, api_key: str) -> ChatCompletionClient:
    """Build the client for *provider* from a :class:`~codemend.config.Config`."""
    try:
        client_cls = _CLIENTS[provider]
    except KeyError:
        raise ConfigError(f"Unknown provider '{provider}'") from None
    return client_cls(
        base_url=cfg.base_url(provider), model=model, api_key=api_key,
        max_tokens=cfg.MAX_TOKENS, temperature=cfg.TEMPERATURE,
        top_p=cfg.TOP_P, timeout=cfg.REQUEST_TIMEOUT,
        max_retries=cfg.LLM_MAX_RETRIES, retry_delay=cfg.LLM_RETRY_DELAY,
    )
