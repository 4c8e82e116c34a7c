from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Protocol

from meeting_webinar.config import get_webinar_environ_config
from meeting_webinar.errors import WebinarError, WebinarErrorCode


class CredentialProvider(Protocol):
    async def get_token(self) -> str: ...


class StaticTokenProvider:
    """Hands out a fixed token, e.g. one issued out of band for a bot user."""

    def __init__(self, token: str) -> None:
        self._token = token

    @classmethod
    def from_config(cls) -> StaticTokenProvider:
        token = get_webinar_environ_config().WEBINAR_USER_TOKEN
        if not token:
            raise WebinarError(
                errcode=WebinarErrorCode.E_TOKEN_UNAVAILABLE,
                errmesg="WEBINAR_USER_TOKEN must be configured. Set it in env.local or environment variables.",
            )
        return cls(token)

    async def get_token(self) -> str:
        return self._token


class CallableTokenProvider:
    """Adapts a sync or async token factory (e.g. a credential store method)."""

    def __init__(self, factory: Callable[[], str | Awaitable[str]]) -> None:
        self._factory = factory

    async def get_token(self) -> str:
        token = self._factory()
        if inspect.isawaitable(token):
            token = await token
        return token
