#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from laakhay.rtdb import BatchOperation, Credentials, RTDBClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Write, read and delete a few nodes via REST")
    p.add_argument("credentials", help="Service account JSON key file")
    p.add_argument("database", help="Database name or URL")
    p.add_argument("root", nargs="?", default="/examples/crud")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    creds = Credentials.from_file(args.credentials)

    async with RTDBClient(credentials=creds, database=args.database) as db:
        await db.set(f"{args.root}/users/alice", {"name": "Alice", "age": 30})
        await db.update(f"{args.root}/users/alice", {"age": 31})
        key = await db.push(f"{args.root}/logs", {"event": "login", "user": "alice"})
        await db.batch(
            [
                BatchOperation.for_set(f"{args.root}/users/bob", {"name": "Bob", "age": 25}),
                BatchOperation.for_set(f"{args.root}/users/carol", {"name": "Carol", "age": 41}),
            ]
        )
        visits = await db.increment(f"{args.root}/stats/visits")

        print("=" * 50)
        print(f"alice      : {await db.get(f'{args.root}/users/alice')}")
        print(f"log key    : {key}")
        print(f"users      : {await db.keys(f'{args.root}/users')}")
        print(f"visits     : {visits}")
        print("-" * 50)
        for entry in await db.range(f"{args.root}/users", "age", 26, 50):
            print(f"{entry.key:10} | {entry.value['age']:>3}")
        print("=" * 50)

        await db.delete(args.root)


if __name__ == "__main__":
    asyncio.run(main())
