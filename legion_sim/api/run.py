"""Launch script for the simulation API."""

import argparse

import uvicorn


def main(argv=None):
    """Start the API server."""
    parser = argparse.ArgumentParser(prog="python -m legion_sim.api.run")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args(argv)

    uvicorn.run(
        "legion_sim.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
