"""Request submission: serialize, POST, check status, deserialize.

:class:`RequestDispatcher` runs the whole round trip for one request and
never lets transport or marshalling errors escape. Each failure is logged
once at ERROR level and returned as a failed
:class:`~afterbuy_client.utils.http.outcome.Outcome`.
"""

import logging
from typing import Mapping, Optional, Type, TypeVar, Union

from ...exceptions import MarshallingError, TransportError
from ...models.base import AbstractRequest, AbstractResponse, CallStatus
from ...serializer import XmlMarshaller
from ..security import redact_credentials
from .outcome import Failure, FailureKind, Outcome
from .transport import HttpTransport

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=AbstractResponse)

XML_HEADERS: Mapping[str, str] = {"Content-Type": "text/xml; charset=utf-8"}


class RequestDispatcher:
    """Sends requests to one fixed endpoint.

    Holds no per-call state, so one dispatcher can serve concurrent calls
    as long as the transport can.

    :param transport: HTTP capability used for the POST
    :type transport: HttpTransport
    :param endpoint: Absolute URL of the Afterbuy XML interface
    :type endpoint: str
    :param marshaller: Marshaller for both directions
    :type marshaller: Optional[XmlMarshaller]
    :param log: Logger to report to; defaults to this module's logger
    :type log: Optional[Union[logging.Logger, logging.LoggerAdapter]]
    """

    def __init__(
        self,
        transport: HttpTransport,
        endpoint: str,
        marshaller: Optional[XmlMarshaller] = None,
        log: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ):
        self.transport = transport
        self.endpoint = endpoint
        self.marshaller = marshaller or XmlMarshaller()
        self.log = log or logger

    def submit(self, request: AbstractRequest, response_type: Type[R]) -> Outcome[R]:
        """Run one round trip.

        :param request: Fully built request
        :type request: AbstractRequest
        :param response_type: Model to deserialize the answer into
        :type response_type: Type[R]
        :return: The response, or a failure tagged with its stage
        :rtype: Outcome[R]
        """
        call_name = request.call_name

        try:
            body = self.marshaller.serialize(request)
        except MarshallingError as e:
            return self._fail(FailureKind.MARSHALLING, e, f"Could not serialize {call_name} request")

        if self.log.isEnabledFor(logging.DEBUG):
            self.log.debug(
                "Posting %s to Afterbuy at %s: %s",
                call_name,
                self.endpoint,
                redact_credentials(body),
            )

        try:
            response = self.transport.post(self.endpoint, body, XML_HEADERS)
        except Exception as e:
            # post() may raise any exception type
            error = e if isinstance(e, TransportError) else TransportError(
                f"{type(e).__name__}: {e}", cause=e
            )
            return self._fail(FailureKind.TRANSPORT, error, f"Afterbuy {call_name} request failed")

        if self.log.isEnabledFor(logging.DEBUG):
            body_text = response.body
            if isinstance(body_text, bytes):
                body_text = body_text.decode("utf-8", errors="replace")
            self.log.debug("Afterbuy response (HTTP %d): %s", response.status_code, body_text)

        if not 200 <= response.status_code < 300:
            error = TransportError(
                f"Afterbuy responded with HTTP status code {response.status_code}",
                status_code=response.status_code,
            )
            return self._fail(FailureKind.TRANSPORT, error, None)

        try:
            parsed = self.marshaller.deserialize(response.body, response_type)
        except MarshallingError as e:
            return self._fail(
                FailureKind.MARSHALLING, e, f"Could not read {call_name} response"
            )

        if parsed.call_status == CallStatus.ERROR.value:
            self.log.warning(
                "Afterbuy rejected %s: %s",
                call_name,
                "; ".join(
                    f"[{err.code}] {err.description or err.long_description}"
                    for err in parsed.errors
                )
                or "no error details",
            )
        return Outcome.success(parsed)

    def _fail(
        self, kind: FailureKind, error: Exception, context: Optional[str]
    ) -> Outcome:
        failure = Failure.from_error(kind, error)
        if context:
            self.log.error("%s: %s", context, failure.message)
        else:
            self.log.error("%s", failure.message)
        return Outcome.failed(failure)
