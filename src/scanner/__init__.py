"""RTP/RTCP datagram scanner.

The pipeline is deliberately small:
UDP socket -> classifier -> (RTP only) fixed header decoder -> reporter.
"""
