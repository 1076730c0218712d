"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# OpenAI (assistants platform)
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
PLATFORM_TIMEOUT: float = 60.0

# Company knowledge file (downloaded once, uploaded and indexed into a vector store)
KNOWLEDGE_FILE_URL: str = (
    os.getenv("KNOWLEDGE_FILE_URL", "https://openai-agent.vercel.app/company_data.json").strip()
    or "https://openai-agent.vercel.app/company_data.json"
)
KNOWLEDGE_FILE_PURPOSE: str = "assistants"
VECTOR_STORE_NAME: str = os.getenv("VECTOR_STORE_NAME", "Company Knowledge Base").strip() or "Company Knowledge Base"
DOWNLOAD_TIMEOUT: float = 30.0

# Assistant entity. Looked up by name; an existing one is reused as-is.
ASSISTANT_NAME: str = os.getenv("ASSISTANT_NAME", "Company Email Assistant").strip() or "Company Email Assistant"
ASSISTANT_INSTRUCTIONS: str = (
    "You are an AI that writes professional email responses using company-specific data."
)
ASSISTANT_MODEL: str = os.getenv("ASSISTANT_MODEL", "gpt-4o").strip() or "gpt-4o"

# Run polling (seconds)
RUN_POLL_INTERVAL: float = float(os.getenv("RUN_POLL_INTERVAL", "").strip() or "2.0")
RUN_TIMEOUT: float = float(os.getenv("RUN_TIMEOUT", "").strip() or "300.0")

# Server
PORT: int = int(os.getenv("PORT", "").strip() or "3000")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
