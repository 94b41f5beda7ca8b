#!/usr/bin/env python3
"""Ping a JMRI WebSocket server and wait for the pong.

Usage:
    python scripts/ping_jmri.py [--host HOST] [--port PORT] [--config FILE]
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from jmri_client import TransportError, create_container, load_client_config
from jmri_client.application.services.jmri_session_service import STATUS_PONG
from jmri_client.domain.value_objects import get_ping_json_string


async def ping(config: dict, wait: float) -> int:
    container = create_container(config)
    service = container.session_service

    try:
        await service.initialize()
    except TransportError as err:
        print(f"Failed to connect to JMRI WebSocket server: {err}")
        return 1

    print(f"Connected to {container.transport.url}")
    print(f"Sending: {get_ping_json_string()}")
    await service.send_ping()

    deadline = asyncio.get_running_loop().time() + wait
    while asyncio.get_running_loop().time() < deadline:
        if service.status == STATUS_PONG:
            break
        await asyncio.sleep(0.1)

    print(service.status)
    for message in service.received_messages:
        print(f"  <- {message}")

    await service.cleanup()
    return 0 if service.status == STATUS_PONG else 2


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--config", help="YAML client configuration file")
    parser.add_argument("--host", help="Server host (overrides config)")
    parser.add_argument("--port", type=int, help="Server port (overrides config)")
    parser.add_argument(
        "--wait", type=float, default=10.0, help="Seconds to wait for the pong"
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = load_client_config(args.config) if args.config else {}
    if args.host:
        config["host"] = args.host
    if args.port:
        config["port"] = args.port

    return asyncio.run(ping(config, args.wait))


if __name__ == "__main__":
    sys.exit(main())
