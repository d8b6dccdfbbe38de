"""
Engineer Guide management CLI

Usage:
    engineer-guide serve [--host HOST] [--port PORT] [--reload]
    engineer-guide init-db
    engineer-guide seed
    engineer-guide create-admin --email EMAIL --password PASSWORD [--username NAME]
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="engineer-guide",
        description="Engineer Guide - API server and database management",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 1.0.0")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the API server with uvicorn")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: SERVER_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: SERVER_PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("init-db", help="Create database tables")
    subparsers.add_parser("seed", help="Seed empty collections with starter data")

    admin_parser = subparsers.add_parser("create-admin", help="Create an admin or promote an existing account")
    admin_parser.add_argument("--email", required=True, help="Admin email")
    admin_parser.add_argument("--password", required=True, help="Admin password")
    admin_parser.add_argument("--username", default=None, help="Optional username")

    return parser


def cmd_serve(args) -> int:
    import uvicorn
    from app.core.config import settings

    host = args.host or settings.SERVER_HOST
    port = args.port or settings.SERVER_PORT
    console.print(f"[cyan]Starting {settings.APP_NAME} on http://{host}:{port}[/cyan]")
    uvicorn.run("app.main:app", host=host, port=port, reload=args.reload)
    return 0


async def _init_db() -> None:
    from app.core.database import init_db, close_db

    try:
        await init_db()
    finally:
        await close_db()


def cmd_init_db(args) -> int:
    asyncio.run(_init_db())
    console.print("[green]✓ Database tables created[/green]")
    return 0


async def _seed() -> dict:
    from app.core.database import close_db
    from app.db.seed_data import seed_all

    try:
        return await seed_all()
    finally:
        await close_db()


def cmd_seed(args) -> int:
    counts = asyncio.run(_seed())

    table = Table(title="Seeded rows", show_header=True, header_style="bold cyan")
    table.add_column("Collection")
    table.add_column("Created", justify="right")
    for collection, count in counts.items():
        table.add_row(collection, str(count))
    console.print(table)

    if not any(counts.values()):
        console.print("[yellow]Nothing to seed - every collection already has data[/yellow]")
    return 0


async def _create_admin(email: str, password: str, username: Optional[str]):
    from app.core.database import AsyncSessionLocal, init_db, close_db
    from app.services.auth_service import AuthService

    try:
        await init_db()
        async with AsyncSessionLocal() as db:
            return await AuthService(db).ensure_admin(email, password, username=username)
    finally:
        await close_db()


def cmd_create_admin(args) -> int:
    from app.core.config import settings
    from app.core.exceptions import EngineerGuideError

    if len(args.password) < settings.MIN_PASSWORD_LENGTH:
        console.print(f"[red]✗ Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long[/red]")
        return 1

    try:
        user, created = asyncio.run(_create_admin(args.email, args.password, args.username))
    except EngineerGuideError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        return 1

    action = "Created" if created else "Promoted"
    console.print(f"[green]✓ {action} admin[/green] [bold]{user.email}[/bold]")
    return 0


COMMANDS = {
    "serve": cmd_serve,
    "init-db": cmd_init_db,
    "seed": cmd_seed,
    "create-admin": cmd_create_admin,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
