from __future__ import annotations

from dataclasses import dataclass
from typing import Final

RTP_VERSION: Final[int] = 2
RTP_HEADER_SIZE: Final[int] = 12
MIN_PAYLOAD_DATA: Final[int] = 1
MIN_DATAGRAM_SIZE: Final[int] = RTP_HEADER_SIZE + MIN_PAYLOAD_DATA

# IANA RTCP packet type range (SR=200, RR=201, SDES=202, ...).
RTCP_PACKET_TYPE_START: Final[int] = 192
RTCP_PACKET_TYPE_END: Final[int] = 223

# 1500 MTU minus IP/UDP headers leaves ~1280 safe; WebRTC caps payloads at 1200.
MAX_PAYLOAD_SIZE: Final[int] = 1200


@dataclass(frozen=True, slots=True)
class RtpHeader:
    version: int
    padding: bool
    extension: bool
    csrc_count: int
    marker: bool
    payload_type: int
    sequence_number: int
    timestamp: int
    ssrc: int


def rtp_version(first_byte: int) -> int:
    return (first_byte >> 6) & 0x03


def decode_rtp_header(data: bytes | bytearray | memoryview) -> RtpHeader:
    """Decode the 12-byte RTP fixed header (RFC 3550, section 5.1).

     0                   1                   2                   3
     0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1 2 3 4 5 6 7 8 9 0 1
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |V=2|P|X|  CC   |M|     PT      |       sequence number         |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |                           timestamp                           |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+
    |           synchronization source (SSRC) identifier            |
    +-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+-+

    The version is not checked here; callers classify the datagram first.
    CSRC identifiers and header extensions are left undecoded.

    Raises:
        ValueError: if fewer than 12 bytes are supplied.
    """

    if len(data) < RTP_HEADER_SIZE:
        raise ValueError(f"RTP header too short: {len(data)} bytes")

    b0 = data[0]
    b1 = data[1]

    return RtpHeader(
        version=rtp_version(b0),
        padding=bool((b0 >> 5) & 1),
        extension=bool((b0 >> 4) & 1),
        csrc_count=b0 & 0x0F,
        marker=bool((b1 >> 7) & 1),
        payload_type=b1 & 0x7F,
        sequence_number=int.from_bytes(data[2:4], "big"),
        timestamp=int.from_bytes(data[4:8], "big"),
        ssrc=int.from_bytes(data[8:12], "big"),
    )


def encode_rtp_header(header: RtpHeader) -> bytes:
    """Build the 12-byte fixed header for ``header``. Fields are masked to their widths."""

    b0 = (
        ((header.version & 0x03) << 6)
        | ((1 if header.padding else 0) << 5)
        | ((1 if header.extension else 0) << 4)
        | (header.csrc_count & 0x0F)
    )
    b1 = ((1 if header.marker else 0) << 7) | (header.payload_type & 0x7F)

    raw = bytes([b0, b1])
    raw += int(header.sequence_number & 0xFFFF).to_bytes(2, "big")
    raw += int(header.timestamp & 0xFFFFFFFF).to_bytes(4, "big")
    raw += int(header.ssrc & 0xFFFFFFFF).to_bytes(4, "big")
    return raw
