"""Run the gcloud MCP server from a source checkout: ``python server.py``."""

import sys
from pathlib import Path


def main() -> None:
    sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))
    from gcloud_mcp.server import run_entrypoint

    run_entrypoint()


if __name__ == "__main__":
    main()
