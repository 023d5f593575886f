"""Request pipeline: one authenticated, retried JSON exchange per submit().

Pipeline per call:
    build headers -> log attempt -> send (retrying transport failures)
    -> 2xx: parsed body | non-2xx: typed ApiError | transport: DadataConnectionError

Every log line and every surfaced error goes through the redactor first.
"""

import re

import httpx

from dadata.config.settings import Configuration
from dadata.errors import (
    REQUEST_FAILED,
    ConfigurationError,
    DadataConnectionError,
    classify,
    classify_transport,
)
from dadata.logging.secure import RequestTimer, generate_request_id, request_id_var
from dadata.security.redaction import sanitize_headers, sanitize_message
from dadata.transport.base import Request, Response
from dadata.transport.retry import build_retrying

_JSON_CONTENT_TYPE = re.compile(r"\bjson$")


class RequestPipeline:
    """Sends requests for one API area through a pooled httpx client.

    The pool is shared by every call issued through this instance; httpx
    makes concurrent checkout from it safe across threads.
    """

    def __init__(
        self,
        base_url: str,
        config: Configuration,
        transport: httpx.BaseTransport | None = None,
    ):
        config.validate()
        self.base_url = base_url
        self._config = config
        self._client = httpx.Client(
            base_url=base_url,
            limits=httpx.Limits(
                max_connections=config.connection_pool_size,
                max_keepalive_connections=config.connection_pool_size,
            ),
            timeout=self._timeout(config.timeout_sec),
            transport=transport,
        )

    @property
    def logger(self):
        return self._config.logger

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def _timeout(self, seconds: float) -> httpx.Timeout:
        return httpx.Timeout(seconds, pool=self._config.connection_pool_timeout)

    def _resolve_timeout(self, timeout: float | None) -> float:
        if timeout is None:
            return self._config.timeout_sec
        if timeout <= 0:
            raise ConfigurationError("Timeout must be positive")
        return timeout

    def _build_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Token {self._config.api_key}",
        }
        if self._config.secret_key:
            headers["X-Secret"] = self._config.secret_key
        return headers

    def submit(self, path: str, payload=None, method: str = "GET", timeout: float | None = None):
        """Perform one exchange and return the parsed response body.

        Args:
            path: Endpoint path relative to the pipeline's base URL.
            payload: Query parameters for GET, JSON body for other methods.
            method: HTTP method name (case-insensitive).
            timeout: Per-call timeout in seconds; defaults to the configured one.

        Raises:
            ApiError: the service answered with a non-2xx status.
            DadataConnectionError: no response after the retry budget was spent.
        """
        request = Request(
            path=path,
            payload={} if payload is None else payload,
            method=method.upper(),
            timeout_sec=self._resolve_timeout(timeout),
        )
        headers = self._build_headers()

        token = request_id_var.set(generate_request_id())
        try:
            timer = RequestTimer()
            try:
                with timer:
                    raw = build_retrying()(self._send, request, headers)
            except httpx.RequestError as exc:
                # Retried failures and body decoding errors both end up here
                error = classify_transport(exc)
                self._log_failure(
                    f"DaData Connection Error: {sanitize_message(str(exc))}",
                    headers,
                    {"error_type": type(exc).__name__, "elapsed_ms": timer.elapsed_ms},
                )
                raise error from None

            response = self._read_response(raw, headers, timer.elapsed_ms)
            if response.ok:
                return response.body

            error = classify(response.status_code, response.body)
            self._log_failure(
                f"DaData API Error: {error.message} ({response.status_code})",
                headers,
                {"status_code": response.status_code, "elapsed_ms": timer.elapsed_ms},
            )
            raise error
        finally:
            request_id_var.reset(token)

    def _send(self, request: Request, headers: dict[str, str]) -> httpx.Response:
        """One attempt; transport exceptions propagate to the retry controller."""
        self._log_request(request, headers)
        timeout = self._timeout(request.timeout_sec)
        if request.is_query:
            return self._client.request(
                request.method,
                request.path,
                params=request.payload or None,
                headers=headers,
                timeout=timeout,
            )
        return self._client.request(
            request.method,
            request.path,
            json=request.payload,
            headers=headers,
            timeout=timeout,
        )

    def _read_response(self, raw: httpx.Response, headers: dict[str, str], elapsed_ms: float) -> Response:
        if not raw.is_success:
            return Response(status_code=raw.status_code)
        try:
            body = self._parse_body(raw)
        except ValueError as exc:
            self._log_failure(
                f"DaData Parsing Error: {sanitize_message(str(exc))}",
                headers,
                {"status_code": raw.status_code, "elapsed_ms": elapsed_ms},
            )
            raise DadataConnectionError(REQUEST_FAILED) from None
        return Response(status_code=raw.status_code, body=body)

    @staticmethod
    def _parse_body(raw: httpx.Response):
        if not raw.content:
            return None
        mime_type = raw.headers.get("content-type", "").split(";")[0].strip()
        if _JSON_CONTENT_TYPE.search(mime_type):
            return raw.json()
        return raw.text

    def _log_request(self, request: Request, headers: dict[str, str]) -> None:
        msg = f"DaData Request: {request.method} {request.path}"
        if request.payload:
            msg += f"\nParams: {request.payload!r}"
        msg += f"\nHeaders: {sanitize_headers(headers)}"
        self.logger.debug(msg)

    def _log_failure(self, msg: str, headers: dict[str, str], audit_data: dict) -> None:
        self.logger.error(
            f"{msg}\nHeaders: {sanitize_headers(headers)}",
            extra={"audit_data": audit_data},
        )

    def close(self) -> None:
        if not self._client.is_closed:
            self._client.close()
