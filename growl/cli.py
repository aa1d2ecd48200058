# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""growlnotify-compatible command line tool."""

import argparse
import logging
import sys

from .client import BinaryClient, TextClient
from .constants import ORIGIN_SOFTWARE_NAME, ORIGIN_SOFTWARE_VERSION
from .errors import GrowlError
from .notification import NotificationSession


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="growl",
        description="Send a Growl notification. Reads the message from STDIN unless -m is given.",
    )
    parser.add_argument("-H", "--host", required=True, help="Send notifications to HOSTNAME")
    parser.add_argument("-n", "--name", default=ORIGIN_SOFTWARE_NAME, help="Sending application name")
    parser.add_argument(
        "-y", "--type", dest="notify_type", default=f"{ORIGIN_SOFTWARE_NAME} Notification", help="Notification type"
    )
    parser.add_argument("-t", "--title", default="", help="Notification title")
    parser.add_argument("-m", "--message", help="Send this message instead of reading STDIN")
    parser.add_argument("--priority", type=int, default=0, help="Notification priority, -2 to 2")
    parser.add_argument("-s", "--sticky", action="store_true", help="Make the notification sticky")
    parser.add_argument("-P", "--password", help="Growl password")
    parser.add_argument("--udp", action="store_true", help="Use the UDP protocol of Growl 1.2 and older")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log packets to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {ORIGIN_SOFTWARE_VERSION}")
    return parser


def read_message() -> str:
    """Read the notification message from STDIN."""
    if sys.stdin.isatty():
        print("Type your message and hit ^D", file=sys.stderr)
    return sys.stdin.read()


def main(argv: list[str] | None = None) -> int:
    """Run the command line tool."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(message)s")

    message = args.message if args.message is not None else read_message()

    session = NotificationSession.create(args.name, [args.notify_type], password=args.password)
    client_class = BinaryClient if args.udp else TextClient

    try:
        with client_class(args.host, session) as client:
            client.register()
            client.notify(args.notify_type, args.title, message, args.priority, args.sticky)
    except (GrowlError, OSError) as e:
        logging.error("growl: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
