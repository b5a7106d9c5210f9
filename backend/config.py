"""Configuration management for the Banking Chat Gateway."""
import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# History store (Supabase)
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY") or os.getenv("SUPABASE_ANON_KEY")
HISTORY_TABLE = os.getenv("HISTORY_TABLE", "chat_history")

# Language model (Gemini)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_API_URL = os.getenv("GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

# Banking service
BANKING_API_URL = os.getenv("BANKING_API_URL") or os.getenv("MOCK_BANKING_API_URL")

# Server Configuration
PORT = int(os.getenv("PORT", "3001"))
MOCK_BANKING_PORT = int(os.getenv("MOCK_BANKING_PORT", "3002"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")

# CORS Configuration
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000"
).split(",")

# Generation parameters (not user-controlled)
LLM_TEMPERATURE = 0.7
LLM_TOP_K = 40
LLM_TOP_P = 0.95

# Outbound timeouts (seconds)
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "30"))
BANKING_API_TIMEOUT = float(os.getenv("BANKING_API_TIMEOUT", "10"))

# Chat behaviour
DEFAULT_ACCOUNT_ID = os.getenv("DEFAULT_ACCOUNT_ID", "12345")
HISTORY_CONTEXT_LIMIT = 10  # turns sent to the model

# Logging Configuration
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
