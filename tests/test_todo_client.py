"""todo_clientモジュールのテスト"""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from src.session import Session
from src.todo_client import (
    AuthError,
    AuthResponse,
    FetchError,
    Todo,
    TodoApiClient,
    User,
)

API_URL = "http://api.test/api/v1"


def make_response(status_code: int, payload=None) -> Mock:
    """requests.Responseのモック"""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if payload is None:
        response.content = b""
        response.json.side_effect = ValueError("no body")
    else:
        response.content = json.dumps(payload).encode("utf-8")
        response.json.return_value = payload
    response.text = response.content.decode("utf-8")
    return response


@pytest.fixture
def http() -> Mock:
    """requests.Sessionインスタンスのモック"""
    with patch("src.todo_client.client.requests.Session") as session_cls:
        yield session_cls.return_value


@pytest.fixture
def client(http: Mock) -> TodoApiClient:
    return TodoApiClient(API_URL)


class TestAuth:
    """認証APIのテスト"""

    def test_login_success(self, client: TodoApiClient, http: Mock) -> None:
        """ログイン成功でtokenとuserを返す"""
        http.request.return_value = make_response(
            200,
            {"token": "t1", "user": {"id": "u1", "name": "A", "email": "a@b.com"}},
        )

        result = client.login("a@b.com", "pw")

        assert result == AuthResponse(token="t1", user=User(id="u1", name="A", email="a@b.com"))
        http.request.assert_called_once_with(
            "POST",
            f"{API_URL}/users/login",
            headers={"Content-Type": "application/json"},
            json={"email": "a@b.com", "password": "pw"},
            timeout=10.0,
        )

    def test_login_failure(self, client: TodoApiClient, http: Mock) -> None:
        """非2xxはAuthError"""
        http.request.return_value = make_response(401, {"message": "bad credentials"})

        with pytest.raises(AuthError) as exc_info:
            client.login("a@b.com", "wrong")

        assert str(exc_info.value) == "Login failed"
        assert exc_info.value.status == 401
        assert exc_info.value.is_unauthorized
        assert exc_info.value.body == {"message": "bad credentials"}

    def test_login_malformed_body(self, client: TodoApiClient, http: Mock) -> None:
        """2xxでも形式が不正ならAuthError"""
        http.request.return_value = make_response(200, {"token": "t1"})

        with pytest.raises(AuthError) as exc_info:
            client.login("a@b.com", "pw")

        assert exc_info.value.status == 200

    def test_register_sends_name(self, client: TodoApiClient, http: Mock) -> None:
        """登録リクエストにnameが含まれる"""
        http.request.return_value = make_response(
            201,
            {"token": "t2", "user": {"id": "u2", "name": "B", "email": "b@c.com"}},
        )

        result = client.register("b@c.com", "pw", "B")

        assert result.user.name == "B"
        args, kwargs = http.request.call_args
        assert args == ("POST", f"{API_URL}/users/register")
        assert kwargs["json"] == {"email": "b@c.com", "password": "pw", "name": "B"}

    def test_register_failure(self, client: TodoApiClient, http: Mock) -> None:
        http.request.return_value = make_response(409, {"message": "exists"})

        with pytest.raises(AuthError, match="Registration failed"):
            client.register("b@c.com", "pw", "B")

    def test_logout(self, client: TodoApiClient, http: Mock) -> None:
        """ログアウトはボディなしのPOST"""
        http.request.return_value = make_response(200)

        assert client.logout() is None
        http.request.assert_called_once_with(
            "POST", f"{API_URL}/users/logout", headers={}, json=None, timeout=10.0
        )

    def test_logout_failure(self, client: TodoApiClient, http: Mock) -> None:
        http.request.return_value = make_response(500)

        with pytest.raises(AuthError) as exc_info:
            client.logout()

        assert exc_info.value.status == 500
        assert not exc_info.value.is_unauthorized


class TestTodos:
    """Todo APIのテスト"""

    def test_get_todos_unwraps_envelope(self, client: TodoApiClient, http: Mock) -> None:
        """エンベロープからdataを取り出す"""
        http.request.return_value = make_response(
            200,
            {"statusCode": 200, "data": [{"id": "1", "title": "X", "description": "Y"}]},
        )

        todos = client.get_todos()

        assert todos == [Todo(id="1", title="X", description="Y")]
        http.request.assert_called_once_with(
            "GET",
            f"{API_URL}/todos",
            headers={"Content-Type": "application/json"},
            json=None,
            timeout=10.0,
        )

    def test_get_todos_coerces_numeric_ids(self, client: TodoApiClient, http: Mock) -> None:
        http.request.return_value = make_response(
            200,
            {"statusCode": 200, "data": [{"id": 7, "title": "X"}], "success": True},
        )

        todos = client.get_todos()

        assert todos[0].id == "7"
        assert todos[0].description == ""

    def test_get_todos_without_status_code(self, client: TodoApiClient, http: Mock) -> None:
        """statusCodeのないエンベロープも受け付ける"""
        http.request.return_value = make_response(200, {"data": [{"id": "1", "title": "X"}]})

        todos = client.get_todos()

        assert todos == [Todo(id="1", title="X", description="")]

    def test_get_todos_unauthorized(self, client: TodoApiClient, http: Mock) -> None:
        http.request.return_value = make_response(401, {"message": "unauthorized"})

        with pytest.raises(FetchError) as exc_info:
            client.get_todos()

        assert str(exc_info.value) == "Failed to fetch todos"
        assert exc_info.value.is_unauthorized

    def test_get_todos_malformed_envelope(self, client: TodoApiClient, http: Mock) -> None:
        http.request.return_value = make_response(200, {"statusCode": 200, "data": "oops"})

        with pytest.raises(FetchError) as exc_info:
            client.get_todos()

        assert exc_info.value.status == 200

    def test_get_todos_connection_error(self, client: TodoApiClient, http: Mock) -> None:
        """通信エラーはstatus=NoneのFetchError"""
        http.request.side_effect = requests.exceptions.ConnectionError("down")

        with pytest.raises(FetchError) as exc_info:
            client.get_todos()

        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    def test_add_todo(self, client: TodoApiClient, http: Mock) -> None:
        """サーバーが採番したidを含むTodoを返す"""
        http.request.return_value = make_response(
            201,
            {"statusCode": 201, "data": {"id": "2", "title": "New", "description": "Desc"}},
        )

        todo = client.add_todo("New", "Desc")

        assert todo == Todo(id="2", title="New", description="Desc")
        args, kwargs = http.request.call_args
        assert args == ("POST", f"{API_URL}/todos/addTodo")
        assert kwargs["json"] == {"title": "New", "description": "Desc"}

    def test_add_todo_empty_title(self, client: TodoApiClient, http: Mock) -> None:
        """空タイトルは通信しない"""
        with pytest.raises(ValueError):
            client.add_todo("   ", "Desc")

        http.request.assert_not_called()

    def test_add_todo_failure(self, client: TodoApiClient, http: Mock) -> None:
        http.request.return_value = make_response(400, {"message": "bad"})

        with pytest.raises(FetchError, match="Failed to add todo"):
            client.add_todo("New", "Desc")

    def test_remove_todo(self, client: TodoApiClient, http: Mock) -> None:
        """204でNoneを返す"""
        http.request.return_value = make_response(204)

        assert client.remove_todo("1") is None
        http.request.assert_called_once_with(
            "DELETE", f"{API_URL}/todos/removeTodo/1", headers={}, json=None, timeout=10.0
        )

    def test_remove_todo_failure(self, client: TodoApiClient, http: Mock) -> None:
        http.request.return_value = make_response(404, {"message": "not found"})

        with pytest.raises(FetchError) as exc_info:
            client.remove_todo("1")

        assert exc_info.value.status == 404

    def test_remove_todo_requires_id(self, client: TodoApiClient, http: Mock) -> None:
        with pytest.raises(ValueError):
            client.remove_todo("")

        http.request.assert_not_called()


class TestSessionLifecycle:
    """セッション適用のテスト"""

    def _session(self) -> Session:
        return Session(
            token="t1",
            user=User(id="u1", name="A", email="a@b.com"),
            cookies={"sid": "abc"},
        )

    def test_base_url_trailing_slash(self, http: Mock) -> None:
        client = TodoApiClient(API_URL + "/")
        http.request.return_value = make_response(200)

        client.logout()

        assert http.request.call_args[0][1] == f"{API_URL}/users/logout"

    def test_cookies_round_trip(self, client: TodoApiClient, http: Mock) -> None:
        """セッションのクッキーがjarに入り、export_cookiesで取り出せる"""
        http.cookies = requests.cookies.RequestsCookieJar()

        client.use_session(self._session())
        assert client.export_cookies() == {"sid": "abc"}

        client.clear_session()
        assert client.export_cookies() == {}

    def test_no_bearer_header_by_default(self, client: TodoApiClient, http: Mock) -> None:
        """デフォルトではクッキーのみで認証する"""
        http.cookies = requests.cookies.RequestsCookieJar()
        client.use_session(self._session())
        http.request.return_value = make_response(200, {"statusCode": 200, "data": []})

        client.get_todos()

        assert "Authorization" not in http.request.call_args[1]["headers"]

    def test_bearer_header_when_enabled(self, http: Mock) -> None:
        http.cookies = requests.cookies.RequestsCookieJar()
        client = TodoApiClient(API_URL, send_bearer_token=True)
        client.use_session(self._session())
        http.request.return_value = make_response(200, {"statusCode": 200, "data": []})

        client.get_todos()
        assert http.request.call_args[1]["headers"]["Authorization"] == "Bearer t1"

        client.clear_session()
        client.get_todos()
        assert "Authorization" not in http.request.call_args[1]["headers"]
