"""Fake statistics endpoint for exercising the monitor locally.

Serves ``GET /_stats`` in the same comma-separated format as the real
server, shaped by a named scenario.

Usage:
    python -m simulator.stats_server                       # healthy server
    python -m simulator.stats_server --scenario overloaded --port 8080
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Callable

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

logger = logging.getLogger("simulator")

GIB = 1024 ** 3
GBIT = 1_000_000_000 // 8  # bytes/sec on a 1 Gbit/s link


def _payload(
    load: float,
    mem: tuple[int, int],
    disk: tuple[int, int],
    net: tuple[int, int],
) -> str:
    return f"{load:.1f},{mem[0]},{mem[1]},{disk[0]},{disk[1]},{net[0]},{net[1]}"


# ── Scenario generators ──────────────────────────────
# Each gets the 1-based request number and returns the body, or None for a 503.


def healthy(request_no: int) -> str | None:
    """Everything well under every threshold."""
    return _payload(
        load=random.uniform(0.5, 8.0),
        mem=(16 * GIB, int(16 * GIB * random.uniform(0.2, 0.6))),
        disk=(500 * GIB, int(500 * GIB * random.uniform(0.3, 0.7))),
        net=(GBIT, int(GBIT * random.uniform(0.05, 0.5))),
    )


def overloaded(request_no: int) -> str | None:
    """Every metric over its threshold."""
    return _payload(
        load=random.uniform(35.0, 80.0),
        mem=(16 * GIB, int(16 * GIB * random.uniform(0.85, 0.99))),
        disk=(500 * GIB, int(500 * GIB * random.uniform(0.92, 0.99))),
        net=(GBIT, int(GBIT * random.uniform(0.92, 0.99))),
    )


def flaky(request_no: int) -> str | None:
    """Odd requests succeed, even requests get a 503."""
    return healthy(request_no) if request_no % 2 else None


def garbage(request_no: int) -> str | None:
    """Malformed payloads the parser must reject."""
    return random.choice([
        "not,a,payload",
        "1.0,2,3,4,5,6",
        "1.0,2,3,4,5,6,seven",
        "",
    ])


def down(request_no: int) -> str | None:
    return None


SCENARIOS: dict[str, Callable[[int], str | None]] = {
    "healthy": healthy,
    "overloaded": overloaded,
    "flaky": flaky,
    "garbage": garbage,
    "down": down,
}


# ── App ──────────────────────────────────────────────


def create_app(scenario: str = "healthy") -> FastAPI:
    if scenario not in SCENARIOS:
        raise ValueError(f"Unknown scenario: {scenario}")
    generate = SCENARIOS[scenario]
    app = FastAPI(title="Stats simulator")
    app.state.scenario = scenario
    app.state.requests = 0

    @app.get("/_stats", response_class=PlainTextResponse)
    async def stats() -> str:
        app.state.requests += 1
        body = generate(app.state.requests)
        if body is None:
            logger.info("Scenario %s: answering 503", scenario)
            raise HTTPException(status_code=503, detail="stats unavailable")
        logger.info("Scenario %s: %s", scenario, body)
        return body

    return app


def main() -> None:
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [SIM] %(message)s")

    parser = argparse.ArgumentParser(description="Server statistics simulator")
    parser.add_argument("--scenario", choices=list(SCENARIOS.keys()), default="healthy")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args()

    logger.info("Serving scenario %s on http://%s:%d/_stats", args.scenario, args.host, args.port)
    uvicorn.run(create_app(args.scenario), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
