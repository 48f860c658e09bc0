#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from laakhay.rtdb import Credentials, RTDBClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Page through the children of a node by key")
    p.add_argument("credentials", help="Service account JSON key file")
    p.add_argument("database", help="Database name or URL")
    p.add_argument("path", nargs="?", default="/posts")
    p.add_argument("page_size", nargs="?", type=int, default=10)
    p.add_argument("--newest-first", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    creds = Credentials.from_file(args.credentials)

    async with RTDBClient(credentials=creds, database=args.database) as db:
        cursor = None
        number = 0
        while True:
            page = await db.paginate_with_count(
                args.path, args.page_size, cursor, reverse=args.newest_first
            )
            number += 1
            print("=" * 50)
            print(f"Page {number} ({len(page)} of {page.total} children)")
            print("-" * 50)
            for entry in page.items:
                print(f"{entry.key:24} | {entry.value}")
            if not page.has_more:
                break
            cursor = page.next_cursor
        print("=" * 50)


if __name__ == "__main__":
    asyncio.run(main())
