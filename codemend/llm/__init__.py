from .base import LLMClient, LLMError
from .chat_client import (
    ChatCompletionClient, HyperbolicClient, OpenRouterClient, create_client,
)
