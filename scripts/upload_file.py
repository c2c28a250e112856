#!/usr/bin/env python3
"""
Utility: upload a local file to one or more channels.

Usage:
  python scripts/upload_file.py report.pdf --channel C12345 --channel C67890 --comment "Weekly report"

Runs the four-step external upload and prints the resulting file id and
permalink. Exits non-zero when any step fails.

Requires: SLACK_BOT_TOKEN in environment (or .env).
"""
from __future__ import annotations
import argparse
import os
import sys
from pathlib import Path

# Add project src to path if not already available
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from slack_rpc import SlackClient
from slack_rpc.log import setup_logging, get_logger

logger = get_logger("upload_file")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Upload a file to Slack channels")
    p.add_argument("path", help="File to upload")
    p.add_argument("--channel", action="append", default=[], help="Target channel id (repeatable)")
    p.add_argument("--title", help="File title (defaults to the file name)")
    p.add_argument("--comment", help="Initial comment posted with the file")
    p.add_argument("--thread-ts", help="Share into this thread")
    args = p.parse_args(argv)

    setup_logging()
    path = Path(args.path)
    client = SlackClient()

    session = client.upload_file(
        path.read_bytes(),
        path.name,
        channel_ids=args.channel,
        title=args.title,
        initial_comment=args.comment,
        thread_ts=args.thread_ts,
    )
    if not session.done:
        logger.error(f"Upload aborted at {session.failed_step.value}: {session.error}")
        return 1

    file = session.result.file or {}
    print(f"id: {file.get('id')}")
    print(f"permalink: {file.get('permalink')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
