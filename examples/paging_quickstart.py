#!/usr/bin/env python3
"""Consume one paginated operation as a stream, an aggregate and manually."""

from __future__ import annotations

import argparse
import asyncio
import logging

from laakhay.paging import extend, from_coroutine, pages_from

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


class InventoryClient:
    """Toy client serving numbered records in fixed-size pages."""

    def __init__(self, total: int, page_size: int) -> None:
        self._fetch = from_coroutine(pages_from([f"record-{i}" for i in range(total)], page_size))

    def list_records(self, query, callback):
        self._fetch(query, callback)


extend(InventoryClient, "list_records")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Quickstart for paginated operations")
    p.add_argument("--total", type=int, default=23)
    p.add_argument("--page-size", type=int, default=5)
    p.add_argument("--stop-at", default="record-7", help="Record at which the stream is ended")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    client = InventoryClient(args.total, args.page_size)

    # Stream, ending early
    stream = client.list_records()
    async for record in stream:
        print("STREAM", record)
        if record == args.stop_at:
            stream.end()

    # Aggregate callback
    done = asyncio.get_running_loop().create_future()

    def on_all(err, records=None):
        if err:
            done.set_exception(err)
        else:
            done.set_result(records)

    client.list_records(on_all)
    records = await done
    print(f"AGGREGATE {len(records)} records")

    # Manual pagination: maxResults disables aggregation for callbacks
    page_done = asyncio.get_running_loop().create_future()
    client.list_records(
        {"maxResults": args.page_size},
        lambda err, items=None, next_query=None, raw=None: page_done.set_result((items, next_query)),
    )
    items, next_query = await page_done
    print(f"PAGE {items} next={next_query}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
