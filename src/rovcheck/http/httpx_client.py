# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import socket
import threading
import time
from contextlib import nullcontext, suppress
from typing import Any

import httpx

from ..config import ProbeSettings, load_probe_settings
from .client import HttpClient
from .models import HttpRequest, HttpResponse

_SOCKET_EVENTS = ("connect_tcp.complete", "start_tls.complete")


class _DeadlineWatchdog:
    """
    Shuts down the sockets of one exchange once its deadline passes.

    httpx timeouts apply to each connect/read separately, so a peer trickling
    bytes never trips them. Sockets are collected from httpcore trace events and
    shut down from a timer thread, which wakes any blocked read. Name resolution
    cannot be interrupted this way.
    """

    def __init__(self, seconds: float):
        self.seconds = seconds
        self.expired = threading.Event()
        self._lock = threading.Lock()
        self._sockets: list[socket.socket] = []
        self._timer = threading.Timer(seconds, self._expire)
        self._timer.daemon = True

    def __enter__(self) -> _DeadlineWatchdog:
        self._timer.start()
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self._timer.cancel()

    def trace(self, event_name: str, info: dict[str, Any]) -> None:
        if event_name.endswith(_SOCKET_EVENTS):
            self.track(info.get("return_value"))

    def track(self, stream: Any) -> None:
        sock = stream.get_extra_info("socket") if stream is not None else None
        if sock is None:
            return
        with self._lock:
            self._sockets.append(sock)
        if self.expired.is_set():
            self._shutdown(sock)

    def _expire(self) -> None:
        self.expired.set()
        with self._lock:
            sockets = list(self._sockets)
        for sock in sockets:
            self._shutdown(sock)

    @staticmethod
    def _shutdown(sock: socket.socket) -> None:
        with suppress(OSError):
            sock.shutdown(socket.SHUT_RDWR)

    def timeout_error(self) -> httpx.TimeoutException:
        return httpx.ReadTimeout(f"Request exceeded {self.seconds}s deadline")


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    httpx.Client is safe to share between threads, so a single instance serves
    both probes of a check. ``HttpRequest.timeout`` bounds the whole exchange,
    not just each read.
    """

    def __init__(self, settings: ProbeSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_probe_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        headers.setdefault("Accept", "application/json")

        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        follow_redirects = (
            request.allow_redirects if request.allow_redirects is not None else self.settings.allow_redirects
        )
        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = ProbeSettings.max_body_bytes

        started = time.monotonic()
        watchdog = _DeadlineWatchdog(float(timeout)) if timeout and timeout > 0 else None
        try:
            with watchdog or nullcontext():
                content, truncated, resp = self._fetch(request, headers, timeout, follow_redirects, max_body_bytes, watchdog)
        except Exception as exc:  # noqa: BLE001
            if watchdog is not None and watchdog.expired.is_set():
                exc = watchdog.timeout_error()
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                error=exc,
                elapsed=time.monotonic() - started,
            )

        encoding = resp.encoding or "utf-8"
        try:
            text = content.decode(encoding, errors="replace")
        except LookupError:
            text = content.decode("utf-8", errors="replace")

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=dict(resp.headers),
            text=text,
            content=content,
            url=str(resp.url),
            elapsed=time.monotonic() - started,
            meta={
                "body_truncated": truncated,
                "body_bytes_read": len(content),
                "body_bytes_limit": max_body_bytes,
            },
        )

    def _fetch(
        self,
        request: HttpRequest,
        headers: dict[str, str],
        timeout: float,
        follow_redirects: bool,
        max_body_bytes: int,
        watchdog: _DeadlineWatchdog | None,
    ) -> tuple[bytes, bool, httpx.Response]:
        extensions = {"trace": watchdog.trace} if watchdog is not None else None
        with self._client.stream(
            request.method,
            request.url,
            headers=headers,
            timeout=timeout,
            follow_redirects=follow_redirects,
            extensions=extensions,
        ) as resp:
            if watchdog is not None:
                # Reused pooled connections emit no connect events.
                watchdog.track(resp.extensions.get("network_stream"))
            content = bytearray()
            truncated = False
            for chunk in resp.iter_bytes():
                if watchdog is not None and watchdog.expired.is_set():
                    raise watchdog.timeout_error()
                if not chunk:
                    continue
                remaining = max_body_bytes - len(content)
                if len(chunk) > remaining:
                    content.extend(chunk[:remaining])
                    truncated = True
                    break
                content.extend(chunk)
        return bytes(content), truncated, resp

    def close(self) -> None:
        self._client.close()
