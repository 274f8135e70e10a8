"""Tests for the service container and the session guard helpers."""

from unittest.mock import MagicMock, patch

import pytest
from starlette.requests import Request

from api.dependencies import ServiceContainer, get_container, reset_container
from api.middleware.auth import read_session_handle
from modules.auth.codec import SessionCodec
from modules.auth.exceptions import InvalidSessionError
from modules.auth.repository import SessionRepository
from modules.auth.session_store import InMemorySessionStore
from shared.config import Settings


def make_request(cookie: str = "") -> Request:
    headers = [(b"cookie", cookie.encode())] if cookie else []
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


class TestServiceContainer:
    def test_memory_session_store_by_default(self):
        container = ServiceContainer(settings=Settings(_env_file=None))
        assert isinstance(container.session_store, InMemorySessionStore)

    @patch("shared.database.get_supabase_client")
    def test_supabase_session_store(self, mock_client):
        mock_client.return_value = MagicMock()
        container = ServiceContainer(settings=Settings(_env_file=None, session_store="supabase"))

        assert isinstance(container.session_store, SessionRepository)

    def test_services_are_cached(self, container):
        assert container.sessions is container.sessions
        assert container.tasks is container.tasks
        assert container.reconciler is container.reconciler

    def test_codecs_use_separate_salts(self, container):
        signed = container.state_codec.dumps("value")
        assert container.session_codec.loads(signed) is None

    def test_get_container_singleton(self):
        first = get_container()
        assert get_container() is first
        reset_container()
        assert get_container() is not first


class TestReadSessionHandle:
    codec = SessionCodec("secret", max_age_seconds=60)

    def test_no_cookie(self):
        assert read_session_handle(make_request(), "tasker_session", self.codec) is None

    def test_valid_cookie(self):
        request = make_request(f"tasker_session={self.codec.dumps('handle-1')}")
        assert read_session_handle(request, "tasker_session", self.codec) == "handle-1"

    def test_bad_signature(self):
        request = make_request("tasker_session=forged")
        with pytest.raises(InvalidSessionError):
            read_session_handle(request, "tasker_session", self.codec)
