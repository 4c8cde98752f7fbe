"""Tests for the HTTP boundary, with scripted service clients."""
import pytest
from fastapi.testclient import TestClient

from getcode.fastapis.deps import get_code_generator, get_execution_proxy, get_generation_api_key
from getcode.main import app
from getcode.models import ModelInvocationError, ModelRateLimitedError
from getcode.models.prompt import SIMPLE_MODE_DIRECTIVE

from .conftest import PISTON_HELLO


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_generator(make_generator):
    def _use(*script, api_key="test-key", **kwargs):
        generator = make_generator(*script, **kwargs)
        app.dependency_overrides[get_code_generator] = lambda: generator
        app.dependency_overrides[get_generation_api_key] = lambda: api_key
        return generator
    return _use


@pytest.fixture
def use_proxy(make_proxy):
    def _use(*replies):
        proxy = make_proxy(*replies)
        app.dependency_overrides[get_execution_proxy] = lambda: proxy
        return proxy
    return _use


# =============================================================================
# /api/generate
# =============================================================================

def test_generate_print_hello(client, use_generator):
    generator = use_generator("```python\nprint('hello')\n```")

    response = client.post("/api/generate", json={"prompt": "print hello", "language": "Python", "simpleMode": True})

    assert response.status_code == 200
    assert response.json() == {"code": "print('hello')", "language": "python"}
    assert generator.calls == ["model-a"]
    system = generator.seen_messages[0][0]["content"]
    assert "Python" in system
    assert SIMPLE_MODE_DIRECTIVE in system


@pytest.mark.parametrize("prompt", ["", "   "])
def test_blank_prompt_is_400_without_model_calls(client, use_generator, prompt):
    generator = use_generator("never used")

    response = client.post("/api/generate", json={"prompt": prompt, "language": "Python"})

    assert response.status_code == 400
    assert "Please enter a prompt" in response.json()["error"]
    assert generator.calls == []


def test_unknown_language_is_400(client, use_generator):
    generator = use_generator("never used")

    response = client.post("/api/generate", json={"prompt": "hello", "language": "Cobol"})

    assert response.status_code == 400
    assert "Unsupported language" in response.json()["error"]
    assert generator.calls == []


@pytest.mark.parametrize("body", [
    {"language": "Python"},
    {"prompt": "hi", "language": "Python", "temperature": 2},
])
def test_malformed_body_is_400(client, use_generator, body):
    use_generator("never used")

    response = client.post("/api/generate", json=body)

    assert response.status_code == 400
    assert "error" in response.json()


def test_missing_api_key_is_500_without_model_calls(client, use_generator):
    generator = use_generator("never used", api_key=None)

    response = client.post("/api/generate", json={"prompt": "hello", "language": "C"})

    assert response.status_code == 500
    assert "GROQ_API_KEY" in response.json()["error"]
    assert generator.calls == []


def test_fallback_reaches_later_model(client, use_generator):
    generator = use_generator(
        ModelInvocationError("model-a", "decommissioned"),
        "```java\nclass Main {}\n```",
    )

    response = client.post("/api/generate", json={"prompt": "empty class", "language": "java"})

    assert response.status_code == 200
    assert response.json() == {"code": "class Main {}", "language": "java"}
    assert generator.calls == ["model-a", "model-b"]


def test_all_models_failing_is_500_with_last_message(client, use_generator):
    use_generator(
        ModelInvocationError("model-a", "first"),
        ModelInvocationError("model-b", "second"),
        ModelInvocationError("model-c", "third"),
    )

    response = client.post("/api/generate", json={"prompt": "x", "language": "C"})

    assert response.status_code == 500
    assert "third" in response.json()["error"]


def test_rate_limited_is_429(client, use_generator):
    use_generator(
        ModelInvocationError("model-a", "gone"),
        ModelRateLimitedError("model-b", "Rate limit reached"),
        models=["model-a", "model-b"],
    )

    response = client.post("/api/generate", json={"prompt": "x", "language": "C"})

    assert response.status_code == 429
    assert "try again later" in response.json()["error"]


def test_language_echo_is_lowercased(client, use_generator):
    use_generator("#include <iostream>")

    response = client.post("/api/generate", json={"prompt": "x", "language": "C++"})

    assert response.json()["language"] == "c++"


# =============================================================================
# /api/execute
# =============================================================================

def test_execute_shows_stdout(client, use_proxy):
    proxy = use_proxy(PISTON_HELLO)

    response = client.post("/api/execute", json={"code": "print('hi')", "language": "python", "stdin": ""})

    assert response.status_code == 200
    body = response.json()
    assert "hi" in body["output"]
    assert body["exitCode"] == 0
    assert body["systemMessage"] is None
    assert (body["language"], body["version"]) == ("python", "3.10.0")
    assert proxy.payloads[0]["stdin"] == ""


def test_execute_forwards_stdin(client, use_proxy):
    proxy = use_proxy(PISTON_HELLO)

    client.post("/api/execute", json={"code": "print(input())", "language": "python", "stdin": "3\n"})

    assert proxy.payloads[0]["stdin"] == "3\n"


def test_verify_uses_empty_stdin(client, use_proxy):
    proxy = use_proxy({"compile": {"stdout": "", "stderr": "error: expected ';'", "code": 1, "signal": None}})

    response = client.post("/api/execute/verify", json={"code": "int main() { return 0 }", "language": "c"})

    assert response.status_code == 200
    assert proxy.payloads[0]["stdin"] == ""
    assert response.json()["output"] == "Execution Error:\nerror: expected ';'"


def test_execute_rejection_is_200_with_system_message(client, use_proxy):
    use_proxy({"message": "runtime is unknown"})

    response = client.post("/api/execute", json={"code": "x", "language": "python"})

    assert response.status_code == 200
    assert response.json()["systemMessage"] == "runtime is unknown"
    assert response.json()["output"] == "Error: runtime is unknown"


def test_execute_unreachable_service_is_502(client, use_proxy):
    use_proxy("Error connecting to execution server.")

    response = client.post("/api/execute", json={"code": "x", "language": "python"})

    assert response.status_code == 502
    assert response.json() == {"error": "Error connecting to execution server."}


def test_execute_unknown_language_uses_default_runtime(client, use_proxy):
    proxy = use_proxy(PISTON_HELLO)

    response = client.post("/api/execute", json={"code": "print('hi')", "language": "klingon"})

    assert response.status_code == 200
    assert proxy.payloads[0]["language"] == "python"


# =============================================================================
# Catalog, status and UI
# =============================================================================

def test_languages_catalog(client):
    body = client.get("/api/languages").json()

    assert body["generation"] == ["C", "C++", "Java", "JavaScript", "Python"]
    assert body["runtimes"]["python"] == {"language": "python", "version": "3.10.0"}
    assert body["runtimes"]["cpp"] == {"language": "c++", "version": "10.2.0"}
    assert body["default_runtime"]["language"] == "python"


@pytest.mark.parametrize("api_key, configured", [("secret", True), (None, False)])
def test_status_reports_key_presence_only(client, use_generator, api_key, configured):
    use_generator(api_key=api_key)

    body = client.get("/api/status").json()

    assert body == {"status": "ok", "models": ["model-a", "model-b", "model-c"], "api_key_configured": configured}


def test_index_page_is_served(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "GetCode" in response.text
    assert "/api/generate" in response.text


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert "error" in response.json()
