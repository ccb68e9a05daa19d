"""crudgen command-line interface.

Usage::

    crudgen init my-api --framework hono
    crudgen generate:module order      # or: crudgen g:m order
    crudgen generate:router health     # or: crudgen g:r health (hono only)

Framework resolution order: ``--framework``, then ``crudgen.json`` in the
project root, then ``CRUDGEN_FRAMEWORK``, then ``elysia``.

A failing command prints its error and aborts; the process still exits 0.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

from crudgen import __version__
from crudgen.config import Config, Framework
from crudgen.scaffolder import ModuleGenerator, ProjectInitializer, RouterGenerator
from crudgen.utils import print_error

EXIT_OK = 0

Handler = Callable[[Config, argparse.Namespace], Awaitable[Path]]


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


async def _cmd_init(config: Config, args: argparse.Namespace) -> Path:
    return await ProjectInitializer(config).initialize(args.project_name)


async def _cmd_module(config: Config, args: argparse.Namespace) -> Path:
    return await ModuleGenerator(config).generate(args.name.lower())


async def _cmd_router(config: Config, args: argparse.Namespace) -> Path:
    return await RouterGenerator(config).generate(args.name.lower())


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crudgen",
        description="crudgen -- Elysia.js / Hono.js API project generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  crudgen init my-api\n"
            "  crudgen init my-api --framework hono --skip-install\n"
            "  crudgen g:m order\n"
            "  crudgen g:r health\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--cwd",
        default=None,
        help="Directory to run in (default: current directory)",
    )
    parser.add_argument(
        "--framework", "-f",
        choices=[f.value for f in Framework],
        default=None,
        help="Target framework (default: from crudgen.json, CRUDGEN_FRAMEWORK, or elysia)",
    )

    sub = parser.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    init = sub.add_parser("init", help="Initialize a new project")
    init.add_argument("project_name", help="Name of the project directory to create")
    init.add_argument(
        "--skip-install",
        action="store_true",
        default=None,
        help="Do not run bun init / bun add",
    )
    init.set_defaults(handler=_cmd_init, reads_project_file=False)

    module = sub.add_parser("generate:module", aliases=["g:m"], help="Generate a new module")
    module.add_argument("name", help="Module name (e.g. order)")
    module.set_defaults(handler=_cmd_module, reads_project_file=True)

    router = sub.add_parser(
        "generate:router", aliases=["g:r"], help="Generate a standalone router (hono)"
    )
    router.add_argument("name", help="Router name (e.g. health)")
    router.set_defaults(handler=_cmd_router, reads_project_file=True)

    return parser


def resolve_config(args: argparse.Namespace) -> Config:
    """Build the ``Config`` for *args* (flags > crudgen.json > env > defaults)."""
    config = Config.from_env(
        project_root=Path(args.cwd).resolve() if args.cwd else None,
        framework=Framework(args.framework) if args.framework else None,
        skip_install=getattr(args, "skip_install", None),
    )
    if args.framework is None and args.reads_project_file:
        config = config.with_project_file()
    return config


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``crudgen`` and ``python -m crudgen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
    except (ValueError, OSError) as exc:
        print_error(f"Error: invalid configuration: {exc}")
        return EXIT_OK

    handler: Handler = args.handler
    try:
        asyncio.run(handler(config, args))
    except Exception:
        # Reported by the generator; the command is aborted.
        return EXIT_OK
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
