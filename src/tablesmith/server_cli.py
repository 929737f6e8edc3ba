"""CLI entry point for the Tablesmith API server."""

import argparse
import os


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="tablesmith-server",
        description="Tablesmith API server — declarative table provisioning for SQLite",
    )
    parser.add_argument("--host", help="Bind host (default: TABLESMITH_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Bind port (default: TABLESMITH_PORT or 8080)")
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy URL of the target database (default: sqlite+aiosqlite:///app.sqlite)",
    )
    parser.add_argument(
        "--console-logs",
        action="store_true",
        help="Human-readable colored logs instead of JSON",
    )
    args = parser.parse_args(argv)

    # Must happen before tablesmith.config is first imported
    if args.database_url:
        os.environ["TABLESMITH_DATABASE_URL"] = args.database_url
    if args.console_logs:
        os.environ["TABLESMITH_JSON_LOGS"] = "0"

    import uvicorn

    from tablesmith.config import settings

    uvicorn.run(
        "tablesmith.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
    )


if __name__ == "__main__":
    main()
