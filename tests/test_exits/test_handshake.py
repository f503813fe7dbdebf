"""Tests for the host-side handshake runner."""

from __future__ import annotations

from typing import Optional

import httpx

from mqjwtexit.auth import PasswordGrantTokenProvider, TokenProvider
from mqjwtexit.config import MappingConfigProvider
from mqjwtexit.exits import HandshakeContext, HandshakeRunner, SecurityExit
from mqjwtexit.exits.handshake import HANDSHAKE_SEQUENCE
from mqjwtexit.exits.jwt_token import JwtSecurityExit
from mqjwtexit.models import AuthenticationType, LifecycleEvent, SecurityParameters


class RecordingExit(SecurityExit):
    """Records every event and the record it was handed."""

    def __init__(self) -> None:
        self.seen: list[tuple[LifecycleEvent, Optional[SecurityParameters]]] = []

    @property
    def name(self) -> str:
        return "recording"

    def on_lifecycle_event(
        self, event: LifecycleEvent, params: Optional[SecurityParameters]
    ) -> Optional[SecurityParameters]:
        self.seen.append((event, params))
        if event is LifecycleEvent.SECURITY_PARAMS_REQUESTED and params is None:
            return SecurityParameters(token="created")
        return params


class NullTokenProvider(TokenProvider):
    """Fails the test if a token is ever requested."""

    @property
    def grant_type(self) -> str:
        return "null"

    def fetch_token(self) -> str:
        raise AssertionError("no token should be requested")


class TestHandshakeRunner:
    def test_delivers_events_in_order(self) -> None:
        recorder = RecordingExit()
        ctx = HandshakeRunner(recorder).run()

        assert [event for event, _ in recorder.seen] == list(HANDSHAKE_SEQUENCE)
        assert ctx.events == list(HANDSHAKE_SEQUENCE)

    def test_threads_returned_record_to_later_events(self) -> None:
        recorder = RecordingExit()
        ctx = HandshakeRunner(recorder).run()

        terminate_params = recorder.seen[-1][1]
        assert terminate_params is not None
        assert terminate_params.token == "created"
        assert ctx.params is terminate_params

    def test_host_supplied_record(self) -> None:
        recorder = RecordingExit()
        params = SecurityParameters(user_id="app")
        ctx = HandshakeRunner(recorder).run(params=params)

        assert all(seen is params for _, seen in recorder.seen)
        assert ctx.params is params

    def test_deliver_single_event(self) -> None:
        recorder = RecordingExit()
        ctx = HandshakeContext()

        HandshakeRunner(recorder).deliver(ctx, LifecycleEvent.INIT)

        assert ctx.events == [LifecycleEvent.INIT]
        assert ctx.params is None

    def test_deliver_unmapped_reason_is_noop(self) -> None:
        security_exit = JwtSecurityExit(token_provider=NullTokenProvider())
        params = SecurityParameters(user_id="app")
        ctx = HandshakeContext(params=params)

        HandshakeRunner(security_exit).deliver(ctx, LifecycleEvent.from_reason("MQXR_SEC_MSG"))

        assert ctx.params is params
        assert params == SecurityParameters(user_id="app")
        assert ctx.events == [None]

    def test_jwt_exit_full_handshake(self) -> None:
        config = MappingConfigProvider({
            "JWT_TOKEN_ENDPOINT": "http://stub/token",
            "JWT_TOKEN_CLIENTID": "cid",
            "JWT_TOKEN_USERNAME": "u",
            "JWT_TOKEN_PWD": "p",
        })
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"access_token": "tok-xyz"})

        provider = PasswordGrantTokenProvider(config, transport=httpx.MockTransport(handler))
        ctx = HandshakeRunner(JwtSecurityExit(token_provider=provider)).run()

        assert len(requests) == 1
        assert ctx.params is not None
        assert ctx.params.authentication_type is AuthenticationType.ID_TOKEN
        assert ctx.params.version == 3
        assert ctx.params.token == "tok-xyz"
