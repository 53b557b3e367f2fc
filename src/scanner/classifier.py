"""Datagram classification: discard, RTCP, or RTP candidate.

RTP and RTCP share the same version bits, so the only discriminator is the
second byte. Values in the IANA RTCP packet-type range (192-223) are treated
as RTCP even when the datagram was meant as RTP with the marker bit set and a
payload type of 64-95; RFC 5761 reserves that payload type range for exactly
this reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from scanner.rtp import (
    MIN_DATAGRAM_SIZE,
    RTCP_PACKET_TYPE_END,
    RTCP_PACKET_TYPE_START,
    RTP_VERSION,
    rtp_version,
)

DiscardReason = Literal["undersized", "bad_version"]


@dataclass(frozen=True, slots=True)
class Invalid:
    length: int
    reason: DiscardReason
    version: int | None = None


@dataclass(frozen=True, slots=True)
class RtcpPacket:
    packet_type: int


@dataclass(frozen=True, slots=True)
class RtpCandidate:
    length: int


ClassificationResult = Union[Invalid, RtcpPacket, RtpCandidate]


def is_rtcp_packet_type(value: int) -> bool:
    return RTCP_PACKET_TYPE_START <= value <= RTCP_PACKET_TYPE_END


def classify(data: bytes | bytearray | memoryview, length: int | None = None) -> ClassificationResult:
    """Classify the first ``length`` bytes of ``data``.

    ``length`` defaults to the whole buffer and never reaches past its end, so
    a reused receive buffer can be passed together with the received size.
    """

    size = len(data) if length is None else max(0, min(length, len(data)))

    if size < MIN_DATAGRAM_SIZE:
        return Invalid(length=size, reason="undersized")

    version = rtp_version(data[0])
    if version != RTP_VERSION:
        return Invalid(length=size, reason="bad_version", version=version)

    second = data[1]
    if is_rtcp_packet_type(second):
        return RtcpPacket(packet_type=second)

    return RtpCandidate(length=size)
