"""Command line entry point: serve the app, migrate the database, try prompts."""
import argparse
import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def cmd_serve(args):
    """Run the web app with uvicorn."""
    import uvicorn

    from punchlines.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "punchlines.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
    )
    return 0


def cmd_migrate(args):
    """Run alembic upgrade to the given revision."""
    from alembic import command
    from alembic.config import Config

    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "alembic"))
    command.upgrade(config, args.revision)
    return 0


def cmd_cleanup_sessions(args):
    """Delete expired login sessions."""
    from punchlines.core.database import get_session_local
    from punchlines.services.auth_service import AuthService

    db = get_session_local()()
    try:
        count = AuthService(db).cleanup_expired_sessions()
    finally:
        db.close()
    print(f"Deleted {count} expired sessions")
    return 0


def cmd_examples(args):
    """Print a shuffled selection of example setups."""
    from punchlines.core.example_prompts import pick_examples

    for example in pick_examples(args.count):
        print(example)
    return 0


def cmd_suggest(args):
    """Ask a running server for punchlines."""
    from punchlines.client import PromptSession

    session = PromptSession(base_url=args.url, session_token=args.token)
    value = asyncio.run(session.submit(args.prompt)).value
    if not value.ok:
        print(f"error: {value.reason}", file=sys.stderr)
        return 1
    for i, text in enumerate(value.results):
        print(f"[{i}] {text}")
    if value.id:
        print(f"joke id: {value.id}")
    return 0


def build_parser():
    p = argparse.ArgumentParser(prog="punchlines")
    sub = p.add_subparsers(dest="cmd")

    s = sub.add_parser("serve", help="Run the web server")
    s.add_argument("--host", default=None)
    s.add_argument("--port", type=int, default=None)
    s.add_argument("--reload", action="store_true", help="Reload on code changes")
    s.set_defaults(func=cmd_serve)

    s = sub.add_parser("migrate", help="Run migrations (upgrade head)")
    s.add_argument("revision", nargs="?", default="head")
    s.set_defaults(func=cmd_migrate)

    s = sub.add_parser("cleanup-sessions", help="Delete expired login sessions")
    s.set_defaults(func=cmd_cleanup_sessions)

    s = sub.add_parser("examples", help="Print example joke setups")
    s.add_argument("-n", "--count", type=int, default=4)
    s.set_defaults(func=cmd_examples)

    s = sub.add_parser("suggest", help="Generate punchlines for a setup")
    s.add_argument("prompt")
    s.add_argument("--url", default="http://localhost:8000", help="Server base URL")
    s.add_argument("--token", default=None, help="Session token, to record the joke")
    s.set_defaults(func=cmd_suggest)
    return p


def main(argv=None):
    p = build_parser()
    args = p.parse_args(argv)
    if not hasattr(args, "func"):
        p.print_help()
        return 2
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
