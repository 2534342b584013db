from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Dict, Optional, Protocol, Set

import httpx

from parking import config
from parking.errors import NotificationError

logger = logging.getLogger("notifications")


def mask_email(address: str) -> str:
    """`driver@example.com` -> `d***@example.com`."""
    local, sep, domain = str(address).partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


class Notifier(Protocol):
    async def send(self, *, to_email: str, subject: str, text: str) -> Dict[str, Any]:
        ...


class ResendNotifier:
    """Plain-text email through the Resend /emails API.

    API key and sender are resolved at send time so that a missing
    configuration only fails the notification, never application startup.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        sender: Optional[str] = None,
        url: str = config.RESEND_API_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._sender = sender
        self._url = url
        self._timeout = timeout
        self._transport = transport

    def _get_api_key(self) -> str:
        key = self._api_key or os.environ.get("RESEND_API_KEY")
        if not key:
            raise NotificationError("RESEND_API_KEY is not set")
        return key

    def _get_sender(self) -> str:
        sender = self._sender or os.environ.get("RESEND_FROM_EMAIL") or os.environ.get("SENDER_EMAIL")
        if not sender:
            raise NotificationError("RESEND_FROM_EMAIL is not set")
        return sender

    async def send(self, *, to_email: str, subject: str, text: str) -> Dict[str, Any]:
        api_key = self._get_api_key()
        payload = {
            "from": self._get_sender(),
            "to": [to_email],
            "subject": subject,
            "text": text,
        }
        headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
        timeout = self._timeout if self._timeout is not None else config.resend_timeout_seconds()

        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            try:
                resp = await client.post(self._url, json=payload, headers=headers)
            except httpx.HTTPError as exc:
                raise NotificationError(f"RESEND_REQUEST_FAILED: {exc}") from exc

        if resp.status_code >= 400:
            raise NotificationError(f"RESEND_API_ERROR {resp.status_code}: {resp.text}")

        try:
            return resp.json()
        except ValueError:
            return {"id": None}


class NotificationDispatcher:
    """Fire-and-forget email sends.

    `dispatch` schedules the send as a detached task and returns at once; the
    caller's response never depends on it. The outcome is only logged.
    Strong references to in-flight tasks are held until they finish.
    """

    def __init__(self, notifier: Notifier, *, enabled: bool = True) -> None:
        self._notifier = notifier
        self._enabled = enabled
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def dispatch(self, *, to_email: str, subject: str, text: str) -> Optional[asyncio.Task]:
        if not self._enabled:
            logger.info("Email notifications disabled; skipping email to %s", mask_email(to_email))
            return None

        task = asyncio.create_task(self._send(to_email=to_email, subject=subject, text=text))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _send(self, *, to_email: str, subject: str, text: str) -> None:
        try:
            info = await self._notifier.send(to_email=to_email, subject=subject, text=text)
        except NotificationError as exc:
            logger.error("Error sending email to %s: %s", mask_email(to_email), exc)
            return
        except Exception as exc:
            logger.error("Unexpected error sending email to %s: %s", mask_email(to_email), exc, exc_info=True)
            return
        logger.info("Email sent to %s (id=%s)", mask_email(to_email), (info or {}).get("id"))

    async def drain(self, timeout: Optional[float] = None) -> None:
        """Wait for in-flight sends (used on shutdown and in tests)."""
        if not self._pending:
            return
        await asyncio.wait(set(self._pending), timeout=timeout)
