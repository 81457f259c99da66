# tests/trigger_eval/conftest.py

import os
import uuid
from pathlib import Path
from typing import Optional

import pytest
from dotenv import load_dotenv

# Tracing off unless explicitly requested for an eval run
os.environ.setdefault("LANGFUSE_ENABLED", "0")

ARTIFACTS_DIR = Path("artifacts/trigger_eval")

# Load .env once for the whole test session
load_dotenv()


def _ensure_artifacts_dir() -> None:
    ARTIFACTS_DIR.mkdir(parents=True, exist_ok=True)
    (ARTIFACTS_DIR / ".gitkeep").touch(exist_ok=True)


def _env(name: str) -> Optional[str]:
    v = os.getenv(name)
    return v.strip() if v and v.strip() else None


@pytest.fixture(scope="session", autouse=True)
def _session_setup() -> None:
    _ensure_artifacts_dir()


@pytest.fixture(scope="session")
def run_id() -> str:
    """Unique id for this pytest run; artifacts go to artifacts/trigger_eval/<run_id>/.
    Override with TRIGGER_EVAL_RUN_ID for stable paths in CI.
    """
    rid = _env("TRIGGER_EVAL_RUN_ID")
    if rid:
        return rid
    return f"pytest-{uuid.uuid4().hex[:10]}"


@pytest.fixture(scope="session")
def llm():
    """Classification model for live trigger evaluation.

    Supports:
    - Azure OpenAI via langchain-openai's AzureChatOpenAI
      Requires: AZURE_OPENAI_ENDPOINT, AZURE_OPENAI_API_KEY, AZURE_OPENAI_DEPLOYMENT
      Optional: AZURE_OPENAI_API_VERSION

    - OpenAI via langchain-openai's ChatOpenAI
      Requires: OPENAI_API_KEY
      Optional: TRIGGER_EVAL_MODEL (defaults to "gpt-4.1-mini")

    If neither is configured, tests are skipped. Temperature is 0 for stability.
    """
    try:
        from langchain_openai import AzureChatOpenAI, ChatOpenAI
    except ImportError as e:
        pytest.skip(f"langchain_openai not available: {e}")

    azure_endpoint = _env("AZURE_OPENAI_ENDPOINT")
    azure_api_key = _env("AZURE_OPENAI_API_KEY")
    azure_deployment = _env("AZURE_OPENAI_DEPLOYMENT")
    azure_api_version = _env("AZURE_OPENAI_API_VERSION") or "2024-06-01"

    if azure_endpoint and azure_api_key and azure_deployment:
        return AzureChatOpenAI(
            azure_endpoint=azure_endpoint,
            api_key=azure_api_key,
            azure_deployment=azure_deployment,
            api_version=azure_api_version,
            temperature=0,
        )

    openai_api_key = _env("OPENAI_API_KEY")
    if openai_api_key:
        return ChatOpenAI(
            api_key=openai_api_key,
            model=_env("TRIGGER_EVAL_MODEL") or "gpt-4.1-mini",
            temperature=0,
        )

    pytest.skip(
        "No LLM credentials found. Set Azure env vars (AZURE_OPENAI_ENDPOINT, AZURE_OPENAI_API_KEY, "
        "AZURE_OPENAI_DEPLOYMENT) or OPENAI_API_KEY."
    )
