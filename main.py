import argparse
import os

import uvicorn


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cloze authoring server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--db-dir", default=None, help="Directory for the SQLite database")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if args.db_dir:
        os.environ["DB_DIR"] = args.db_dir

    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
