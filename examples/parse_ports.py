"""Outcome chaining example.

Parses port numbers from raw strings, keeping only valid ones, without a
single try/except at the call site. Also shows the async siblings.

Usage:
    OUTCOME_TRACE_FAILURES=true OUTCOME_LOG_LEVEL=DEBUG python examples/parse_ports.py
"""

import asyncio

from src.outcome import Outcome, sleep
from src.outcome.log import configure_from_settings


def parse_port(raw: str) -> Outcome[int]:
    return (
        Outcome.from_value(raw or "8080")
        .map(int)
        .filter(lambda port: 0 < port < 65536)
    )


async def lookup_service(port: int) -> str:
    await sleep(10)
    return {22: "ssh", 80: "http", 443: "https"}.get(port, "unknown")


async def main() -> None:
    configure_from_settings()

    for raw in ["443", "80", "", "http", "70000"]:
        result = parse_port(raw)
        described = await result.map_async(lookup_service)
        print(f"{raw!r:>9} -> {described.reduce(str, lambda e: f'invalid ({e})')}")


if __name__ == "__main__":
    asyncio.run(main())
