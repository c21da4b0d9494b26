# framework_quiz/utils/config.py
import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load .env file before defining settings
load_dotenv()

DEFAULT_PROMPT_VARIATIONS_PATH = str(Path(__file__).resolve().parent.parent / "data" / "prompt_variations.yaml")

class Settings(BaseSettings):
    # --- LLM Provider Configuration ---
    llm_provider: str = os.getenv("LLM_PROVIDER", "cloudflare").lower()

    # Cloudflare Workers AI (OpenAI-compatible endpoint)
    cloudflare_account_id: str | None = os.getenv("CLOUDFLARE_ACCOUNT_ID")
    cloudflare_api_token: str | None = os.getenv("CLOUDFLARE_API_TOKEN")
    cloudflare_model: str = os.getenv("CLOUDFLARE_MODEL", "@cf/meta/llama-4-scout-17b-16e-instruct")

    # Ollama specific
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    ollama_model: str = os.getenv("OLLAMA_MODEL", "llama3")

    # OpenAI specific
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_model_name: str = os.getenv("OPENAI_MODEL_NAME", "gpt-4o-mini")

    # Google Gemini specific
    google_api_key: str | None = os.getenv("GOOGLE_API_KEY")
    google_model_name: str = os.getenv("GOOGLE_MODEL_NAME", "gemini-1.5-flash-latest")

    # Generation parameters
    generation_temperature: float = 1.4  # high on purpose, favours variety
    generation_max_attempts: int = 5
    generation_timeout_seconds: float = 10.0  # per attempt, a timeout counts as a failed attempt

    # Tone words and framework reasons used to vary the prompt
    prompt_variations_path: str = DEFAULT_PROMPT_VARIATIONS_PATH

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def active_model_name(self) -> str:
        """Returns the model identifier for the configured provider."""
        return {
            "cloudflare": self.cloudflare_model,
            "ollama": self.ollama_model,
            "openai": self.openai_model_name,
            "google": self.google_model_name,
        }.get(self.llm_provider, "unknown")

settings = Settings()

# --- Validation for API keys based on provider ---
if settings.llm_provider == "openai" and not settings.openai_api_key:
    raise ValueError("LLM_PROVIDER is 'openai' but OPENAI_API_KEY is not set in .env")
if settings.llm_provider == "google" and not settings.google_api_key:
    raise ValueError("LLM_PROVIDER is 'google' but GOOGLE_API_KEY is not set in .env")
# Cloudflare credentials are checked when the client is built, see services/llm_client.py
