"""VAT entry point.

    vat                 interactive chat room
    vat capabilities    list example sentences
    vat memory          print the stored memory document
"""

import asyncio
import json
import logging
import sys

from dotenv import find_dotenv, load_dotenv

from .cli import run_cli


def main() -> None:
    """Main entry point."""
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    command = sys.argv[1] if len(sys.argv) > 1 else None

    if command == "capabilities":
        from .agent import CAPABILITIES

        print("\n".join(CAPABILITIES))
        return

    if command == "memory":
        from .config import config_from_env
        from .memory import MemoryFile

        document = MemoryFile(config_from_env().memory_path).load()
        print(json.dumps(document, ensure_ascii=False, indent=2))
        return

    if command is not None:
        sys.exit(f"Unknown command: {command}")

    asyncio.run(run_cli())


if __name__ == "__main__":
    main()
