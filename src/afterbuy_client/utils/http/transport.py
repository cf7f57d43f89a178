"""HTTP transport used to reach the Afterbuy endpoint.

The dispatcher only depends on the :class:`HttpTransport` protocol, so
tests and applications can pass in any object with a matching ``post``
method. :class:`HttpxTransport` is the default implementation.
"""

from typing import Mapping, NamedTuple, Optional, Protocol, Union, runtime_checkable

import httpx

from ...exceptions import TransportError

DEFAULT_TIMEOUT = 30.0


class TransportResponse(NamedTuple):
    """Status code and body of an HTTP response.

    Raw bytes let the XML parser honour the encoding the document declares.
    """

    status_code: int
    body: Union[str, bytes]

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class HttpTransport(Protocol):
    """Anything that can POST a body and return status plus body.

    Implementations may raise any exception; the dispatcher turns it into
    a failed outcome.
    """

    def post(self, url: str, body: str, headers: Mapping[str, str]) -> TransportResponse:
        ...


def create_timeout(
    connect: float = 5.0,
    read: float = DEFAULT_TIMEOUT,
    write: float = 10.0,
    pool: float = 5.0,
) -> httpx.Timeout:
    """Create a timeout configuration for the Afterbuy client.

    :param connect: Timeout for establishing connections in seconds
    :type connect: float
    :param read: Timeout for reading the response in seconds
    :type read: float
    :param write: Timeout for sending the request body in seconds
    :type write: float
    :param pool: Timeout for acquiring a pooled connection in seconds
    :type pool: float
    :return: Configured timeout object
    :rtype: httpx.Timeout
    """
    return httpx.Timeout(connect=connect, read=read, write=write, pool=pool)


class HttpxTransport:
    """Synchronous transport backed by :class:`httpx.Client`.

    :param client: Client to send requests with. When omitted, the
        transport creates and owns one, and :meth:`close` closes it
    :type client: Optional[httpx.Client]
    :param timeout: Timeout for an owned client
    :type timeout: Optional[httpx.Timeout]
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: Optional[httpx.Timeout] = None,
    ):
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout or create_timeout())

    def post(self, url: str, body: str, headers: Mapping[str, str]) -> TransportResponse:
        """POST ``body`` as UTF-8 to ``url``.

        :raises TransportError: On any network-level failure or a malformed URL
        """
        try:
            response = self.client.post(url, content=body.encode("utf-8"), headers=dict(headers))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"{type(e).__name__} while posting to {url}: {e}", cause=e) from e
        return TransportResponse(status_code=response.status_code, body=response.content)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
