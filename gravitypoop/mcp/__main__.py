"""CLI entry point: python -m gravitypoop.mcp [game_module] [--save-dir DIR]"""

from __future__ import annotations

import sys


def main() -> None:
    args = sys.argv[1:]
    save_dir = None
    if "--save-dir" in args:
        idx = args.index("--save-dir")
        if idx + 1 >= len(args):
            print("Usage: python -m gravitypoop.mcp [game_module] [--save-dir DIR]", file=sys.stderr)
            sys.exit(1)
        save_dir = args[idx + 1]
        del args[idx:idx + 2]
    module_path = args[0] if args else "gravitypoop.catalog"

    from gravitypoop.log import configure_logging

    # stdout carries the MCP protocol
    configure_logging("INFO", sink=sys.stderr)

    # Redirect stdout to stderr during module loading in case define_game() prints
    real_stdout = sys.stdout
    sys.stdout = sys.stderr
    try:
        from gravitypoop.cli import load_game

        definition = load_game(module_path)
    finally:
        sys.stdout = real_stdout

    from gravitypoop.mcp.server import create_server
    from gravitypoop.persistence import JsonFileStore

    store = JsonFileStore(save_dir) if save_dir else None
    server = create_server(definition, store=store)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
