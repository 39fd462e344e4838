"""Request body size limit middleware.

Rejects requests whose body exceeds the configured maximum before the
multipart parser buffers it. Enforces the limit for both Content-Length and
Transfer-Encoding: chunked. Raw ASGI.
"""

from typing import Callable

from sikap.middleware._asgi import get_header, send_error


class _BodyTooLarge(Exception):
    """Raised inside receive() when the streamed body passes the limit."""


async def _send_413(send: Callable, max_bytes: int, actual: int) -> None:
    await send_error(
        send,
        413,
        "PAYLOAD_TOO_LARGE",
        f"Request body must be at most {max_bytes} bytes",
        {"max_bytes": max_bytes, "content_length": actual},
    )


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes (Content-Length or streamed). Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        content_length = get_header(scope, "content-length")
        if content_length:
            try:
                length = int(content_length)
            except ValueError:
                length = None
            if length is not None and length > max_bytes:
                await _send_413(send, max_bytes, length)
                return

        # Content-Length can lie or be absent; count what is actually received.
        received = 0
        rejected = False
        response_started = False
        replaced = False

        async def limited_receive() -> dict:
            nonlocal received, rejected
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > max_bytes:
                    rejected = True
                    raise _BodyTooLarge()
            return message

        async def send_wrapper(message: dict) -> None:
            nonlocal response_started, replaced
            if message["type"] == "http.response.start":
                response_started = True
                # The framework may turn the receive error into its own 400.
                if rejected:
                    replaced = True
                    await _send_413(send, max_bytes, received)
                    return
            if replaced:
                return
            await send(message)

        try:
            await app(scope, limited_receive, send_wrapper)
        except _BodyTooLarge:
            if not response_started:
                await _send_413(send, max_bytes, received)

    return asgi_app
