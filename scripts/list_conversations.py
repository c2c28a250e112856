#!/usr/bin/env python3
"""
Utility: print the conversations the token can see.

Usage:
  python scripts/list_conversations.py --types public_channel,private_channel --all

Follows the cursor when --all is given.

Requires: SLACK_BOT_TOKEN in environment (or .env).
"""
from __future__ import annotations
import argparse
import os
import sys

ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from slack_rpc import SlackClient
from slack_rpc.log import setup_logging


def main():
    p = argparse.ArgumentParser(description="List Slack conversations")
    p.add_argument("--types", help="Comma separated conversation types")
    p.add_argument("--limit", type=int, default=100)
    p.add_argument("--include-archived", action="store_true")
    p.add_argument("--all", action="store_true", help="Follow pagination cursors")
    args = p.parse_args()

    setup_logging()
    client = SlackClient()
    types = args.types.split(",") if args.types else None

    cursor = ""
    while True:
        resp = client.conversations_list(
            cursor=cursor,
            exclude_archived=not args.include_archived,
            limit=args.limit,
            types=types,
        )
        if not resp.ok:
            print(f"Error: {resp.error}")
            sys.exit(1)
        for ch in resp.channels or []:
            print(f"{ch.get('id')}\t{ch.get('name', '')}")
        cursor = resp.next_cursor
        if not args.all or not cursor:
            break


if __name__ == "__main__":
    main()
