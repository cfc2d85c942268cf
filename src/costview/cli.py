import argparse
import logging
import os
from pathlib import Path
from typing import Optional, Sequence, Tuple

from dotenv import load_dotenv

from .aggregate import grand_total
from .collection import Collection
from .config import Config
from .config import load_config as load_runtime_config
from .dataset import Dataset, DatasetLoadError, load_dataset
from .reporting import collection_frame, make_summary_text, write_report

BASE_DIR = Path(__file__).resolve().parents[2]

load_dotenv(BASE_DIR / ".env")

logger = logging.getLogger(__name__)


def parse_add_option(option: str) -> Tuple[str, Optional[str]]:
    """Split ``"ITEM=QTY"`` into its parts; the quantity is optional."""

    code, sep, quantity = option.partition("=")
    return code.strip(), (quantity.strip() if sep else None)


def _log_rows(dataset: Dataset) -> None:
    logger.info("%s", " | ".join(dataset.headers))
    for row in dataset.rows:
        logger.info("%s", " | ".join(row))


def build_collection(dataset: Dataset, adds: Sequence[str], add_all: bool = False) -> Collection:
    collection = Collection.for_dataset(dataset)
    if add_all:
        collection.add_rows(dataset.rows)
    for option in adds:
        code, quantity = parse_add_option(option)
        row = dataset.find_item(code)
        if row is None:
            logger.warning("No row with Item %r in the current view; skipping.", code)
            continue
        if collection.add_row(row) is None:
            continue
        if quantity is not None:
            collection.set_quantity(len(collection) - 1, quantity)
    return collection


def run(
    runtime_config: Config,
    search: str = "",
    adds: Sequence[str] = (),
    add_all: bool = False,
) -> int:
    dataset = load_dataset(runtime_config.dataset_path, encoding=runtime_config.encoding)
    view = dataset.filtered(search)
    logger.info("Rows (filtered: %s of %s)", len(view), len(dataset))

    if not adds and not add_all:
        _log_rows(view)
        return 0

    collection = build_collection(view, adds, add_all=add_all)
    groups = collection.report()
    if len(collection):
        table = collection_frame(collection.items)
        logger.info("\n=== COLLECTION ===\n")
        logger.info("%s", table.to_string(index=False, float_format=lambda value: f"{value:,.2f}"))
    logger.info("\n=== SUMMARY ===\n")
    logger.info("%s", make_summary_text(groups))
    logger.debug("Grand line total: %s", grand_total(groups).line_total)

    if runtime_config.output_path is not None:
        write_report(runtime_config.output_path, collection.items, groups)
    return 0


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse a cost sheet and total a collection of its rows")
    parser.add_argument("--dataset", help="Path to the cost sheet CSV")
    parser.add_argument("--search", default="", help="Case-insensitive text filter applied to every cell")
    parser.add_argument(
        "--add",
        action="append",
        default=[],
        metavar="ITEM[=QTY]",
        help="Add the row with this Item code; QTY is a unit count, or a dollar base for PCT rows",
    )
    parser.add_argument("--all", dest="add_all", action="store_true", help="Add every row in the filtered view")
    parser.add_argument("--output", help="Write the report to this .xlsx or .csv file")
    parser.add_argument("--encoding", help="Text encoding of the dataset")
    parser.add_argument("-v", "--verbose", action="store_true", help="Increase logging verbosity")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    runtime_cfg = load_runtime_config(os.environ, args)
    log_level = logging.DEBUG if runtime_cfg.verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(message)s")
    try:
        return run(runtime_cfg, search=args.search, adds=args.add, add_all=args.add_all)
    except DatasetLoadError as exc:
        logger.error("Error loading CSV: %s", exc)
        return 2
    except Exception:  # pragma: no cover
        logger.exception("Fatal error while building the cost report")
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
