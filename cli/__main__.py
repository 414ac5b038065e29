"""CLI entry point: dispatches to subcommands."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

COMMANDS = ("inspect", "resolve", "export", "preview")


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        print("Usage: python -m cli <command> <tileset.tsx> [options]")
        print(f"Commands: {', '.join(COMMANDS)}")
        return 1

    cmd, rest = argv[0], argv[1:]
    if cmd == "inspect":
        from cli.inspect_tileset import main as run
    elif cmd == "resolve":
        from cli.resolve import main as run
    elif cmd == "export":
        from cli.export import main as run
    elif cmd == "preview":
        from cli.preview import main as run
    else:
        print(f"Unknown command: {cmd}")
        return 1
    return run(rest)


if __name__ == "__main__":
    sys.exit(main())
