"""
Happy Thoughts API — Seed Loader
==================================

What:  Resets the `thoughts` collection to a fixed demo dataset.
How:   Validate every record, then delete_all() and insert the documents, so
       seeded messages obey the same 5..140 character rule as POSTed ones.
When:  Either at app startup (RESET_DB=true, see main.lifespan) or from the
       command line:

           happy-thoughts-seed                  # bundled data/thoughts.json
           happy-thoughts-seed --file my.json   # custom dataset
           python -m happy_thoughts.seed -v

Dataset format (JSON array):
    [{"message": "Berlin baby", "hearts": 37, "createdAt": "2025-05-19T22:07:08.999Z"}, ...]
    `hearts` and `createdAt` are optional.
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from pymongo.errors import PyMongoError

from happy_thoughts.config import Settings, settings
from happy_thoughts.database import ThoughtStore, close_client, create_client
from happy_thoughts.exceptions import ValidationError
from happy_thoughts.models.thought import seed_documents

logger = logging.getLogger(__name__)

DEFAULT_SEED_FILE = Path(__file__).parent / "data" / "thoughts.json"


def _parse_created_at(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    # fromisoformat only learned the "Z" suffix in 3.11
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def load_seed_data(path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Read a seed dataset, turning ISO `createdAt` strings into datetimes."""
    path = Path(path) if path else DEFAULT_SEED_FILE
    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)

    if not isinstance(raw, list):
        raise ValueError(f"Seed file {path} must contain a JSON array")

    records = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError(f"Seed file {path} entries must be JSON objects")
        record = dict(item)
        if "createdAt" in record:
            record["createdAt"] = _parse_created_at(record["createdAt"])
        records.append(record)
    return records


async def seed_thoughts(store: ThoughtStore, records: List[Dict[str, Any]]) -> int:
    """
    Replace every thought in the store with `records`.

    Returns the number of inserted thoughts. Every record is validated before
    the delete, so an invalid dataset leaves the existing thoughts untouched.
    """
    documents = seed_documents(records)

    deleted = await store.delete_all()
    logger.info("Removed %d existing thoughts", deleted)
    inserted = await store.insert_documents(documents)
    logger.info("Inserted %d seed thoughts", inserted)
    return inserted


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


async def run_seed(seed_file: Optional[Path] = None, config: Optional[Settings] = None) -> int:
    """
    Seed the configured database and close the connection.

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    config = config or settings
    try:
        records = load_seed_data(seed_file)
    except (OSError, ValueError) as e:
        logger.error("Could not read seed data: %s", e)
        return 1

    client = create_client(config)
    try:
        store = ThoughtStore.from_client(client, config)
        await seed_thoughts(store, records)
        logger.info("Database seeded successfully!")
        return 0
    except (PyMongoError, ValidationError) as e:
        logger.error("Error seeding database: %s", e)
        return 1
    finally:
        await close_client(client)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Reset the Happy Thoughts collection to sample data")
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help=f"JSON dataset to load (default: {DEFAULT_SEED_FILE.name})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    sys.exit(asyncio.run(run_seed(args.file)))


if __name__ == "__main__":
    main()
