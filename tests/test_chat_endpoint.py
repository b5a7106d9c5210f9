"""Integration tests for the POST /chat endpoint."""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
import sys
import os

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))


@pytest.fixture
def client():
    """Create a test client; startup is not run so no real services are built."""
    from main import app
    yield TestClient(app)


@pytest.fixture
def mock_services(client):
    """Install an orchestrator wired to mocked external services."""
    import main
    from services.chat_orchestrator import ChatOrchestrator

    history_store = Mock()
    history_store.get_recent_turns.return_value = []
    banking_client = Mock()
    llm_client = Mock()

    previous = main.orchestrator
    main.orchestrator = ChatOrchestrator(
        history_store=history_store,
        banking_client=banking_client,
        llm_client=llm_client
    )

    yield {
        'history': history_store,
        'banking': banking_client,
        'llm': llm_client,
    }

    main.orchestrator = previous


def test_balance_scenario(client, mock_services):
    """Scenario A: balance question answered from the banking service."""
    from models.banking import Account
    from models.results import BankingResult

    payload = {
        "status": "success",
        "data": {"accountId": "67890", "balance": 45000.0, "currency": "USD"}
    }
    mock_services['banking'].get_account_balance.return_value = BankingResult(
        data=Account("67890", "John Doe Savings", 45000.0, "USD", "Savings"),
        payload=payload
    )

    response = client.post("/chat", json={"userId": "u1", "message": "What is my balance for 67890?"})

    assert response.status_code == 200
    data = response.json()
    assert data["response"] == "Your account 67890 balance is: 45000 USD."
    assert data["bankingData"] == payload


def test_list_accounts_scenario(client, mock_services):
    """Scenario B: three accounts produce exactly three lines in service order."""
    from models.banking import Account
    from models.results import BankingResult

    accounts = [
        Account("98765", "Jane Smith Business", 120000.5, "USD", "Business Checking"),
        Account("12345", "John Doe Checking", 15230.75, "USD", "Checking"),
        Account("67890", "John Doe Savings", 45000.0, "USD", "Savings"),
    ]
    mock_services['banking'].list_accounts.return_value = BankingResult(data=accounts)

    response = client.post("/chat", json={"userId": "u1", "message": "list all accounts"})

    assert response.status_code == 200
    header, *lines = response.json()["response"].split("\n")
    assert header == "Here are your available accounts:"
    assert lines == [
        "Jane Smith Business (ID: 98765, Balance: 120000.5 USD)",
        "John Doe Checking (ID: 12345, Balance: 15230.75 USD)",
        "John Doe Savings (ID: 67890, Balance: 45000 USD)",
    ]


def test_general_scenario(client, mock_services):
    """Scenario C: general chat returns model text verbatim."""
    from models.results import LLMResult

    mock_services['llm'].generate.return_value = LLMResult(text="Hello! How can I help?")

    response = client.post("/chat", json={"userId": "u1", "message": "hi there"})

    assert response.status_code == 200
    data = response.json()
    assert data["response"] == "Hello! How can I help?"
    assert data["bankingData"] is None


@pytest.mark.parametrize("body", [
    {"userId": "u1", "message": ""},
    {"userId": "u1"},
    {"message": "hello"},
    {"userId": 42, "message": "hello"},
])
def test_validation_scenario(client, mock_services, body):
    """Scenario D: invalid input is a 400 and makes no external calls."""
    response = client.post("/chat", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "User ID and message are required."}
    assert mock_services['history'].method_calls == []
    assert mock_services['banking'].method_calls == []
    assert mock_services['llm'].method_calls == []


def test_whitespace_message_is_answered(client, mock_services):
    """Test a whitespace-only message is non-empty and goes through the pipeline."""
    from models.results import LLMResult

    mock_services['llm'].generate.return_value = LLMResult(text="Could you rephrase that?")

    response = client.post("/chat", json={"userId": "u1", "message": "   "})

    assert response.status_code == 200
    assert response.json()["response"] == "Could you rephrase that?"
    mock_services['llm'].generate.assert_called_once()


def test_malformed_json_is_400(client, mock_services):
    """Test a body that is not JSON is reported as a validation error."""
    response = client.post("/chat", content="not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_banking_outage_scenario(client, mock_services):
    """Scenario E: transport failure is absorbed into a 200 apology."""
    from models.results import BankingResult, ErrorKind, ServiceError

    mock_services['banking'].get_account_balance.return_value = BankingResult(error=ServiceError(
        code=ErrorKind.UPSTREAM_UNAVAILABLE,
        message="The banking service is currently unavailable.",
        details={"original_error": "[Errno 111] Connection refused"}
    ))

    response = client.post("/chat", json={"userId": "u1", "message": "What is my balance?"})

    assert response.status_code == 200
    text = response.json()["response"]
    assert text.startswith("I couldn't retrieve the account balance.")
    assert "Connection refused" not in text


def test_missing_history_store_is_500(client):
    """Test an unconfigured history store answers 500 with a safe message."""
    import main
    from services.chat_orchestrator import ChatOrchestrator

    previous = main.orchestrator
    main.orchestrator = ChatOrchestrator(None, Mock(), Mock())
    try:
        response = client.post("/chat", json={"userId": "u1", "message": "hello"})
    finally:
        main.orchestrator = previous

    assert response.status_code == 500
    assert response.json() == {"error": "Chat history store is not configured."}


def test_unexpected_error_is_500(client, mock_services):
    """Test unexpected failures are hidden behind a generic message."""
    mock_services['llm'].generate.side_effect = RuntimeError("boom")

    response = client.post("/chat", json={"userId": "u1", "message": "hello"})

    assert response.status_code == 500
    assert response.json() == {"error": "An internal server error occurred."}


def test_health_endpoint(client):
    """Test the plain-text liveness check."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.text == "Backend API Gateway is healthy"


def test_root_endpoint(client):
    response = client.get("/")
    assert response.json()["status"] == "ok"
