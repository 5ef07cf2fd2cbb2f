"""Entry point: python -m drawlots [ensure|read|write FILE|add JSON]

- "ensure" (default): Resolve the data directory and print where it is
- "read":             Print the stored history
- "write FILE":       Replace the history with the JSON array in FILE ("-" for stdin)
- "add JSON":         Prepend one JSON record to the history
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from drawlots.config import load_config

_USAGE = """Usage: python -m drawlots [ensure|read|write FILE|add JSON]
  ensure       Resolve and print the data directory (default)
  read         Print the stored history
  write FILE   Replace the history with the JSON array in FILE (- for stdin)
  add JSON     Prepend one JSON record to the history"""


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _load_payload(source: str) -> object:
    if source == "-":
        return json.loads(sys.stdin.read())
    return json.loads(Path(source).read_text(encoding="utf-8"))


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    cmd = args[0] if args else "ensure"

    config = load_config()
    _setup_logging(config.log_level)

    from drawlots.commands import CommandError, StorageCommands
    from drawlots.history import HistoryRepository
    from drawlots.storage import StorageError

    commands = StorageCommands.from_config(config)

    try:
        if cmd == "ensure":
            _print_json(commands.ensure_data_dir().to_dict())
        elif cmd == "read":
            _print_json(commands.read_history_file().to_dict())
        elif cmd == "write" and len(args) == 2:
            _print_json(commands.write_history_file(_load_payload(args[1])).to_dict())
        elif cmd == "add" and len(args) == 2:
            record = json.loads(args[1])
            if not isinstance(record, dict):
                print("Record must be a JSON object", file=sys.stderr)
                return 1
            repo = HistoryRepository(commands.store, limit=config.history.limit)
            repo.save(record)
            _print_json(commands.read_history_file().to_dict())
        else:
            print(_USAGE, file=sys.stderr)
            return 1
    except (CommandError, StorageError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot load input: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
