# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Command Line Interface
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
CLI entry point for PixAvatar.

Usage::

    pixavatar version
    pixavatar generate saitama --size 512 --grid 8 --output saitama.png
    pixavatar serve --port 8080 --profile soft
    pixavatar config --profile classic
"""

from __future__ import annotations

import dataclasses
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point — dispatches to subcommands."""
    args = argv if argv is not None else sys.argv[1:]

    if not args or args[0] in ("-h", "--help", "help"):
        _print_help()
        return

    cmd = args[0]
    rest = args[1:]

    commands = {
        "version": _cmd_version,
        "generate": _cmd_generate,
        "serve": _cmd_serve,
        "config": _cmd_config,
    }

    if cmd not in commands:
        print(f"Unknown command: {cmd}")
        _print_help()
        sys.exit(1)

    commands[cmd](rest)


def _print_help() -> None:
    print(
        "PixAvatar CLI\n"
        "\n"
        "Usage: pixavatar <command> [options]\n"
        "\n"
        "Commands:\n"
        "  version                 Show version info\n"
        "  generate [name]         Write an avatar PNG "
        "(--size N --grid N --output PATH)\n"
        "  serve [--port N]        Start the FastAPI server\n"
        "  config [--profile X]    Show configuration\n"
    )


def _option(args: list[str], flag: str) -> str | None:
    if flag in args:
        idx = args.index(flag)
        if idx + 1 < len(args):
            return args[idx + 1]
    return None


def _load_config(args: list[str]):
    from pixavatar.core.config import AvatarConfig

    profile = _option(args, "--profile")
    try:
        if profile:
            return AvatarConfig.from_profile(profile)
        return AvatarConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


def _cmd_version(args: list[str]) -> None:
    import pixavatar

    print(f"pixavatar {pixavatar.__version__}")


def _cmd_generate(args: list[str]) -> None:
    from pixavatar.core.exceptions import PixAvatarError
    from pixavatar.core.generator import AvatarGenerator, parse_int_param

    name = args[0] if args and not args[0].startswith("--") else ""
    cfg = _load_config(args)
    output = _option(args, "--output") or cfg.output_path

    generator = AvatarGenerator(cfg)
    try:
        data = generator.generate(
            name,
            parse_int_param(_option(args, "--size")),
            parse_int_param(_option(args, "--grid")),
        )
    except PixAvatarError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        with open(output, "wb") as f:
            f.write(data)
    except OSError as e:
        print(f"Error: cannot write {output}: {e}")
        sys.exit(1)

    print(f"Avatar for '{name or cfg.default_name}' written to {output}")


def _cmd_serve(args: list[str]) -> None:
    cfg = _load_config(args)
    port = cfg.server_port
    host = _option(args, "--host") or cfg.server_host

    raw_port = _option(args, "--port")
    if raw_port is not None:
        try:
            port = int(raw_port)
        except ValueError:
            print(f"Error: invalid port number: {raw_port}")
            sys.exit(1)

    try:
        import uvicorn
    except ImportError:
        print("uvicorn is required: pip install pixavatar[server]")
        sys.exit(1)

    from pixavatar.server import create_app

    try:
        config = dataclasses.replace(cfg, server_host=host, server_port=port)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    app = create_app(config)
    print(f"Starting PixAvatar server on {host}:{port} (profile={config.profile})")
    uvicorn.run(app, host=host, port=port)


def _cmd_config(args: list[str]) -> None:
    if "--profile" in args and _option(args, "--profile") is None:
        print("Usage: pixavatar config --profile <name>")
        sys.exit(1)

    cfg = _load_config(args)
    for key, value in cfg.to_dict().items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
