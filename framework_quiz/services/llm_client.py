# Text-generation client; wraps the LangChain chat model of the configured provider (Cloudflare Workers AI, OpenAI, Ollama, Gemini)
# framework_quiz/services/llm_client.py
import threading
from typing import Protocol

from langchain_community.chat_models import ChatOllama
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from framework_quiz.models.prompt import MessageRole, PromptMessage, PromptMessageSet
from framework_quiz.utils.config import Settings, settings
from framework_quiz.utils.logger import logger

CLOUDFLARE_OPENAI_BASE_URL = "https://api.cloudflare.com/client/v4/accounts/{account_id}/ai/v1"

# Providers whose chat endpoints accept a sampling seed
SEEDED_PROVIDERS = {"cloudflare", "openai", "ollama"}


class TextGenerator(Protocol):
    async def generate(self, messages: PromptMessageSet, seed: int) -> str:
        ...


def build_llm_client(config: Settings) -> BaseChatModel:
    """Creates the chat model for config.llm_provider. Raises ValueError on bad configuration."""
    provider = config.llm_provider
    temperature = config.generation_temperature
    logger.info(f"Initializing LLM client for provider: {provider}")

    # Retries are handled by QuestionGenerator, the clients only get one shot per attempt.
    if provider == "cloudflare":
        if not config.cloudflare_account_id or not config.cloudflare_api_token:
            raise ValueError(
                "LLM_PROVIDER is 'cloudflare' but CLOUDFLARE_ACCOUNT_ID or CLOUDFLARE_API_TOKEN is not set in .env"
            )
        return ChatOpenAI(
            api_key=config.cloudflare_api_token,
            base_url=CLOUDFLARE_OPENAI_BASE_URL.format(account_id=config.cloudflare_account_id),
            model=config.cloudflare_model,
            temperature=temperature,
            max_retries=0,
        )
    if provider == "openai":
        return ChatOpenAI(
            api_key=config.openai_api_key,
            model=config.openai_model_name,
            temperature=temperature,
            max_retries=0,
        )
    if provider == "ollama":
        return ChatOllama(base_url=config.ollama_base_url, model=config.ollama_model, temperature=temperature)
    if provider == "google":
        return ChatGoogleGenerativeAI(
            google_api_key=config.google_api_key,
            model=config.google_model_name,
            temperature=temperature,
            max_retries=0,
        )
    raise ValueError(f"Unsupported LLM_PROVIDER: {provider}")


def to_langchain_message(message: PromptMessage) -> BaseMessage:
    if message.role == MessageRole.SYSTEM:
        return SystemMessage(content=message.content)
    return HumanMessage(content=message.content)


def _content_to_text(content) -> str:
    """Chat models return either a string or a list of content parts."""
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict):
            parts.append(part.get("text", ""))
    return "".join(parts)


class LangChainTextGenerator:
    """
    TextGenerator backed by a LangChain chat model. The underlying client is
    built on the first call, so a misconfigured provider surfaces as a failed
    generation attempt instead of breaking application startup.
    """

    def __init__(self, config: Settings = settings, client: BaseChatModel | None = None):
        self.config = config
        self._client = client
        self._init_lock = threading.Lock()

    @property
    def provider(self) -> str:
        return self.config.llm_provider

    def _get_client(self) -> BaseChatModel:
        with self._init_lock:
            if self._client is None:
                self._client = build_llm_client(self.config)
                logger.info(f"Initialized LLM with provider {self.provider}, model {self.config.active_model_name()}")
            return self._client

    async def generate(self, messages: PromptMessageSet, seed: int) -> str:
        client = self._get_client()
        runnable = client.bind(seed=seed) if self.provider in SEEDED_PROVIDERS else client
        response = await runnable.ainvoke([to_langchain_message(m) for m in messages])
        return _content_to_text(response.content)
