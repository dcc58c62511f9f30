import argparse
import logging
import sys

from config.app_config import LOG_LEVEL

# Configure Logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)


def run_init_db():
    from database.config import init_db

    logging.info("Creating database tables...")
    init_db()
    logging.info("Done.")


def run_server(host: str, port: int):
    import uvicorn

    logging.info(f"Starting API on {host}:{port}")
    uvicorn.run("server:app", host=host, port=port, log_level=LOG_LEVEL.lower())


def main():
    parser = argparse.ArgumentParser(description="Collaboration Lifecycle Engine")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create all tables in DATABASE_URL")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    args = parser.parse_args()

    if args.command == "init-db":
        run_init_db()
    else:
        run_server(args.host, args.port)


if __name__ == "__main__":
    main()
