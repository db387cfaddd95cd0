import argparse
import asyncio
import logging

from .server import DealerServer


def main() -> None:
    parser = argparse.ArgumentParser(description="Five-card poker dealer server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8765)
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed every new game's shuffle (reproducible deals; omit for random)",
    )
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level))

    server = DealerServer(seed=args.seed)
    asyncio.run(server.start(host=args.host, port=args.port))


if __name__ == "__main__":
    main()
