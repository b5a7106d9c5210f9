"""Main entry point for the Banking Chat Gateway API."""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config import PORT, LOG_LEVEL, LOG_FORMAT, CORS_ORIGINS
from logger import setup_logging
from models.api import ChatRequest, ChatResponse, ErrorResponse
from services.banking_client import BankingClient
from services.chat_orchestrator import ChatOrchestrator
from services.exceptions import ChatGatewayError, ConfigurationError
from services.history_store import HistoryStore
from services.llm_client import LLMClient

if LOG_FORMAT == "json":
    setup_logging(LOG_LEVEL)

# Initialize logging
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Banking Chat Gateway",
    description="Routes chat messages to banking lookups or a generative model",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services (will be done on startup)
orchestrator: ChatOrchestrator = None


@app.on_event("startup")
async def startup_event():
    """Initialize long-lived clients and the chat orchestrator."""
    global orchestrator

    logger.info("Initializing Banking Chat Gateway services...")

    history_store = None
    try:
        history_store = HistoryStore()
        logger.info("Initialized HistoryStore")
    except ConfigurationError as e:
        # /chat answers 500 until the store is configured
        logger.error(f"History store disabled: {e.details}")

    banking_client = BankingClient()
    logger.info("Initialized BankingClient")

    llm_client = LLMClient()
    logger.info("Initialized LLMClient")

    orchestrator = ChatOrchestrator(
        history_store=history_store,
        banking_client=banking_client,
        llm_client=llm_client
    )
    logger.info("All services initialized")


@app.exception_handler(ChatGatewayError)
async def gateway_error_handler(request: Request, exc: ChatGatewayError):
    """Render gateway errors as ``{"error": message}`` with their status code."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code}: {exc.message} ({exc.details})")
    else:
        logger.warning(f"{exc.error_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors, reported like missing fields."""
    logger.warning(f"Invalid chat request body: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "User ID and message are required."})


@app.get("/")
async def root():
    """Service banner."""
    return {"status": "ok", "message": "Banking Chat Gateway API"}


@app.get("/health", response_class=PlainTextResponse)
async def health():
    """Liveness check."""
    return "Backend API Gateway is healthy"


@app.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
def chat_endpoint(request: ChatRequest):
    """
    Main chat endpoint.

    Classifies the message, answers it from the banking service or the
    language model, and records both turns in the user's chat history.

    Args:
        request: ChatRequest with userId and message

    Returns:
        ChatResponse with the reply text and optional raw banking data

    Raises:
        ValidationError: Missing userId or message (400)
        ConfigurationError: History store not configured (500)
    """
    if orchestrator is None:
        raise ConfigurationError("Chat service is not initialized.")

    try:
        reply = orchestrator.handle(request.user_id, request.message)
    except ChatGatewayError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error in /chat endpoint: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "An internal server error occurred."})

    return ChatResponse(response=reply.response, banking_data=reply.banking_data)


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Banking Chat Gateway on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
