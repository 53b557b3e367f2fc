"""Entry point for the RTP/RTCP datagram scanner."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from config.settings import load_settings
from scanner.errors import EXIT_OK, ConfigurationError, ScannerError
from scanner.listener import ListenEndpoint, RtpScanner
from scanner.reporter import Reporter

LOGGER = logging.getLogger("rtp_scanner")


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        # Bad flags are configuration errors (exit 1), not argparse's exit 2.
        self.print_usage(sys.stderr)
        raise ConfigurationError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="rtp-scanner",
        description="Capture UDP datagrams on an address/port and print RTP/RTCP header fields (RFC 3550).",
    )
    parser.add_argument("-a", dest="address", metavar="<IP address>", help="IPv4 or IPv6 address to bind")
    parser.add_argument("-p", dest="port", metavar="<port>", type=int, help="UDP port (1-65535)")
    return parser


async def _amain(scanner: RtpScanner) -> None:
    with scanner:
        await scanner.run_forever()


def main(argv: Sequence[str] | None = None) -> int:
    try:
        args = _build_parser().parse_args(argv)
        settings = load_settings(scanner_address=args.address, scanner_port=args.port)
    except ConfigurationError as exc:
        logging.basicConfig(level=logging.INFO)
        LOGGER.error("%s", exc.detail)
        return exc.exit_code

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        endpoint = ListenEndpoint.from_address(settings.scanner_address, settings.scanner_port)
        scanner = RtpScanner(
            endpoint,
            Reporter(),
            max_datagram_size=settings.max_datagram_size,
            reuse_port=settings.reuse_port,
        )
        asyncio.run(_amain(scanner))
    except ScannerError as exc:
        LOGGER.error("%s", exc.detail)
        return exc.exit_code
    except KeyboardInterrupt:
        LOGGER.info("Interrupted, shutting down")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
