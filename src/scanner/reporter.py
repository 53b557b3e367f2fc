from __future__ import annotations

import logging
import sys
from typing import TextIO

from scanner.classifier import Invalid, RtcpPacket
from scanner.rtp import RtpHeader

LOGGER = logging.getLogger(__name__)


def format_rtp(header: RtpHeader, length: int) -> str:
    return (
        f"RTP Packet size {length}, Headers: version: {header.version}, "
        f"padding {int(header.padding)}, extns {int(header.extension)}, "
        f"csrcs {header.csrc_count}, marker {int(header.marker)}, "
        f"payload type {header.payload_type}, seqnum {header.sequence_number}, "
        f"rtp ts {header.timestamp}, ssrc {header.ssrc}"
    )


def format_rtcp(packet: RtcpPacket) -> str:
    return f"RTCP: Packet type = {packet.packet_type}"


def format_discard(result: Invalid) -> str:
    if result.reason == "bad_version":
        return f"Invalid RTP/RTCP version field value {result.version}, size = {result.length}"
    return f"Packet discarded, size = {result.length}"


class Reporter:
    """Writes one line per datagram outcome.

    Output goes to ``stream`` (stdout by default) so it can be piped, while
    diagnostics stay on the logging channel.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys and redirected stdout are honoured.
        return self._stream if self._stream is not None else sys.stdout

    def _emit(self, line: str) -> str:
        print(line, file=self.stream, flush=True)
        return line

    def report_rtp(self, header: RtpHeader, length: int) -> str:
        return self._emit(format_rtp(header, length))

    def report_rtcp(self, packet: RtcpPacket) -> str:
        return self._emit(format_rtcp(packet))

    def report_discard(self, result: Invalid) -> str:
        LOGGER.debug("Discarded datagram (%s, %s bytes)", result.reason, result.length)
        return self._emit(format_discard(result))
