from __future__ import annotations

from scanner.classifier import Invalid, RtcpPacket
from scanner.rtp import RtpHeader


def test_report_rtp_writes_single_line(reporter, output) -> None:
    hdr = RtpHeader(
        version=2,
        padding=False,
        extension=True,
        csrc_count=1,
        marker=True,
        payload_type=96,
        sequence_number=7,
        timestamp=160,
        ssrc=0xCAFEBABE,
    )

    line = reporter.report_rtp(hdr, 172)

    assert output.getvalue() == line + "\n"
    assert "\n" not in line
    assert line.startswith("RTP Packet size 172, Headers: version: 2")
    assert "padding 0, extns 1, csrcs 1, marker 1" in line
    assert "payload type 96, seqnum 7, rtp ts 160" in line
    assert line.endswith(f"ssrc {0xCAFEBABE}")


def test_report_rtcp(reporter, output) -> None:
    reporter.report_rtcp(RtcpPacket(packet_type=201))
    assert output.getvalue() == "RTCP: Packet type = 201\n"


def test_report_undersized_discard(reporter, output) -> None:
    reporter.report_discard(Invalid(length=10, reason="undersized"))
    assert output.getvalue() == "Packet discarded, size = 10\n"


def test_report_version_discard(reporter, output) -> None:
    reporter.report_discard(Invalid(length=40, reason="bad_version", version=1))
    assert output.getvalue() == "Invalid RTP/RTCP version field value 1, size = 40\n"


def test_default_stream_is_stdout(capsys) -> None:
    from scanner.reporter import Reporter

    Reporter().report_rtcp(RtcpPacket(packet_type=203))
    assert capsys.readouterr().out == "RTCP: Packet type = 203\n"
