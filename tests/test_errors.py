from fastapi import FastAPI
from fastapi.testclient import TestClient

from mflix.core.errors import add_exception_handlers
from mflix.core.exceptions import DuplicateKeyError, InvalidArgumentError, MflixError
from mflix.schemas.response import ErrorResponse

app = FastAPI()
add_exception_handlers(app)


@app.post("/comments")
def add_empty_comment():
    raise InvalidArgumentError("Empty comment ID")


@app.post("/users")
def register_existing_user():
    raise DuplicateKeyError("Such user already exists", details={"email": "alice@x.com"})


@app.get("/critics")
def report_unavailable():
    raise MflixError("Report unavailable", code="STORE_UNAVAILABLE", status_code=503)


client = TestClient(app)


def test_invalid_argument_is_a_client_error():
    response = client.post("/comments")
    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "INVALID_ARGUMENT"
    assert data["error"] == "Empty comment ID"
    assert data["details"] is None


def test_duplicate_key_is_a_conflict():
    response = client.post("/users")
    assert response.status_code == 409
    data = response.json()
    assert data["code"] == "DUPLICATE_KEY"
    assert data["details"] == {"email": "alice@x.com"}


def test_other_errors_keep_their_status():
    response = client.get("/critics")
    assert response.status_code == 503
    assert response.json()["code"] == "STORE_UNAVAILABLE"


def test_error_response_from_error():
    body = ErrorResponse.from_error(InvalidArgumentError("Empty text"))
    assert body.model_dump() == {"error": "Empty text", "code": "INVALID_ARGUMENT", "details": None}
