import pytest
import requests
from unittest.mock import MagicMock

from odoo_sync.exceptions import AuthError, BackendFault
from odoo_sync.odoo_client import OdooClient


def _response(result=None, error=None):
    response = MagicMock()
    body = {"jsonrpc": "2.0", "id": 1}
    if error is not None:
        body["error"] = error
    else:
        body["result"] = result
    response.json.return_value = body
    return response


@pytest.fixture
def http_client():
    return MagicMock()


@pytest.fixture
def client(odoo_settings, http_client):
    return OdooClient(odoo_settings, http_client=http_client)


def _sent_params(http_client, call_index=-1):
    _, kwargs = http_client.post.call_args_list[call_index]
    return kwargs["json"]["params"]


def test_authenticate_posts_common_authenticate(client, http_client):
    http_client.post.return_value = _response(result=2)

    uid = client.authenticate()

    assert uid == 2
    assert client.uid == 2
    args, kwargs = http_client.post.call_args
    assert args[0] == "https://odoo.example.com/jsonrpc"
    assert kwargs["timeout"] == 5
    assert kwargs["json"]["method"] == "call"
    assert kwargs["json"]["params"] == {
        "service": "common",
        "method": "authenticate",
        "args": ["testdb", "tester@example.com", "secret", {}],
    }


def test_authenticate_rejected_credentials_raise_auth_error(client, http_client):
    http_client.post.return_value = _response(result=False)

    with pytest.raises(AuthError):
        client.authenticate()
    assert client.uid is None


def test_authenticate_fault_raises_auth_error(client, http_client):
    http_client.post.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(AuthError) as exc_info:
        client.authenticate()
    assert "refused" in exc_info.value.message


def test_calls_before_authenticate_are_refused(client, http_client):
    with pytest.raises(AuthError):
        client.search_read("product.product", [], ["id"])
    http_client.post.assert_not_called()


def test_search_read_builds_execute_kw(client, http_client):
    http_client.post.side_effect = [_response(result=2), _response(result=[{"id": 42, "name": "Foo"}])]
    client.authenticate()

    rows = client.search_read("product.product", [("default_code", "=", "X1")], ["id", "name"], limit=2)

    assert rows == [{"id": 42, "name": "Foo"}]
    assert _sent_params(http_client) == {
        "service": "object",
        "method": "execute_kw",
        "args": [
            "testdb", 2, "secret",
            "product.product", "search_read",
            [[("default_code", "=", "X1")]],
            {"fields": ["id", "name"], "limit": 2},
        ],
    }


def test_search_one_returns_none_on_empty_result(client, http_client):
    http_client.post.side_effect = [_response(result=2), _response(result=[])]
    client.authenticate()

    assert client.search_one("stock.location", [("complete_name", "=", "Nope")], ["id"]) is None


def test_search_one_takes_first_of_ambiguous_match(client, http_client, caplog):
    http_client.post.side_effect = [_response(result=2), _response(result=[{"id": 1}, {"id": 2}])]
    client.authenticate()

    record = client.search_one("product.product", [("name", "=", "Widget")], ["id"])

    assert record == {"id": 1}
    assert "Ambiguous match" in caplog.text


def test_create_returns_new_id(client, http_client):
    http_client.post.side_effect = [_response(result=2), _response(result=99)]
    client.authenticate()

    new_id = client.create("stock.quant", {"product_id": 42, "location_id": 7, "quantity": 5})

    assert new_id == 99
    params = _sent_params(http_client)
    assert params["args"][3:] == ["stock.quant", "create", [{"product_id": 42, "location_id": 7, "quantity": 5}], {}]


def test_rpc_error_member_raises_backend_fault(client, http_client):
    http_client.post.side_effect = [
        _response(result=2),
        _response(error={"code": 200, "message": "Odoo Server Error",
                         "data": {"name": "odoo.exceptions.AccessError", "message": "Access denied"}}),
    ]
    client.authenticate()

    with pytest.raises(BackendFault) as exc_info:
        client.create("stock.quant", {})
    assert exc_info.value.message == "Access denied"
    assert exc_info.value.data["name"] == "odoo.exceptions.AccessError"


def test_http_error_status_raises_backend_fault(client, http_client):
    response = _response(result=None)
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("502 Bad Gateway")
    http_client.post.return_value = response

    with pytest.raises(BackendFault):
        client.call("common", "version")


def test_unreadable_body_raises_backend_fault(client, http_client):
    response = MagicMock()
    response.json.side_effect = ValueError("Expecting value")
    http_client.post.return_value = response

    with pytest.raises(BackendFault):
        client.call("common", "version")


@pytest.mark.parametrize("body", [["not", "an", "object"], "oops", 42])
def test_non_object_body_raises_backend_fault(client, http_client, body):
    response = MagicMock()
    response.json.return_value = body
    http_client.post.return_value = response

    with pytest.raises(BackendFault) as exc_info:
        client.call("common", "version")
    assert "Unreadable response" in exc_info.value.message


def test_plain_string_error_member_raises_backend_fault(client, http_client):
    http_client.post.return_value = _response(error="Bad gateway")

    with pytest.raises(BackendFault) as exc_info:
        client.call("common", "version")
    assert exc_info.value.message == "Bad gateway"
    assert exc_info.value.data == {}


@pytest.mark.parametrize("body", [["not", "an", "object"], "oops", {"error": "Bad gateway"}])
def test_malformed_reply_during_authenticate_raises_auth_error(client, http_client, body):
    response = MagicMock()
    response.json.return_value = body
    http_client.post.return_value = response

    with pytest.raises(AuthError):
        client.authenticate()
    assert client.uid is None
