from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from dataclasses import dataclass

from scanner.classifier import ClassificationResult, Invalid, RtcpPacket, classify
from scanner.errors import ConfigurationError, ReceiveError, SocketSetupError
from scanner.reporter import Reporter
from scanner.rtp import MAX_PAYLOAD_SIZE, MIN_DATAGRAM_SIZE, decode_rtp_header

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ListenEndpoint:
    family: socket.AddressFamily
    host: str
    port: int

    @classmethod
    def from_address(cls, address: str | None, port: int | None) -> ListenEndpoint:
        """Pick the socket family from the address literal.

        Empty binds every IPv4 interface, ``:`` means IPv6 and ``.`` means IPv4.
        Anything else (host names included) is rejected.
        """

        if port is None:
            raise ConfigurationError("A port is required (-p <port>).")
        if not 1 <= port <= 0xFFFF:
            raise ConfigurationError(f"Invalid port number {port}")

        address = (address or "").strip()
        if not address:
            return cls(family=socket.AF_INET, host="0.0.0.0", port=port)

        if ":" in address:
            family, address_type = socket.AF_INET6, ipaddress.IPv6Address
        elif "." in address:
            family, address_type = socket.AF_INET, ipaddress.IPv4Address
        else:
            raise ConfigurationError(f"IP address {address} cannot be processed")

        try:
            address_type(address)
        except ValueError as exc:
            raise ConfigurationError(f"Input IP address {address} invalid") from exc

        return cls(family=family, host=address, port=port)


class RtpScanner:
    """Single-socket UDP listener that classifies and reports every datagram.

    Datagrams are handled one at a time: the receive is the only await point,
    and classification, decoding and reporting finish before the next receive.
    """

    def __init__(
        self,
        endpoint: ListenEndpoint,
        reporter: Reporter | None = None,
        *,
        max_datagram_size: int = MAX_PAYLOAD_SIZE,
        reuse_port: bool = True,
    ) -> None:
        if max_datagram_size < MIN_DATAGRAM_SIZE:
            raise ConfigurationError(f"Receive buffer of {max_datagram_size} bytes is too small")
        self._endpoint = endpoint
        self._reporter = reporter or Reporter()
        self._reuse_port = reuse_port
        self._buffer = bytearray(max_datagram_size)
        self._sock: socket.socket | None = None

    @property
    def endpoint(self) -> ListenEndpoint:
        return self._endpoint

    @property
    def local_address(self) -> tuple:
        if self._sock is None:
            raise SocketSetupError("Socket is not open")
        return self._sock.getsockname()

    def open(self) -> None:
        if self._sock is not None:
            return

        try:
            sock = socket.socket(self._endpoint.family, socket.SOCK_DGRAM)
        except OSError as exc:
            raise SocketSetupError(f"Error creating UDP socket: {exc}") from exc

        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            if self._reuse_port and hasattr(socket, "SO_REUSEPORT"):
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
            sock.bind((self._endpoint.host, self._endpoint.port))
            sock.setblocking(False)
        except OSError as exc:
            sock.close()
            raise SocketSetupError(
                f"Bind error on {self._endpoint.host}:{self._endpoint.port}: {exc}"
            ) from exc

        self._sock = sock

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> RtpScanner:
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def process_datagram(
        self, data: bytes | bytearray | memoryview, length: int | None = None
    ) -> ClassificationResult:
        result = classify(data, length)

        if isinstance(result, Invalid):
            self._reporter.report_discard(result)
        elif isinstance(result, RtcpPacket):
            self._reporter.report_rtcp(result)
        else:
            self._reporter.report_rtp(decode_rtp_header(data), result.length)

        return result

    async def _receive(self, loop: asyncio.AbstractEventLoop) -> int:
        assert self._sock is not None
        try:
            nbytes, _addr = await loop.sock_recvfrom_into(self._sock, self._buffer)
        except OSError as exc:
            raise ReceiveError(f"Error receiving UDP packet: {exc}") from exc
        return nbytes

    async def run_forever(self) -> None:
        """Receive until the peer sends an empty datagram or the socket fails."""

        self.open()
        loop = asyncio.get_running_loop()
        view = memoryview(self._buffer)

        LOGGER.info("RTP scanner listening on %s:%s", self._endpoint.host, self._endpoint.port)

        while True:
            try:
                nbytes = await self._receive(loop)
            except ReceiveError as exc:
                LOGGER.error("%s", exc.detail)
                return

            if nbytes == 0:
                LOGGER.info("Socket closed")
                return

            self.process_datagram(view, nbytes)
