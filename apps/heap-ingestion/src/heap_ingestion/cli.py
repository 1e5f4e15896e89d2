"""Command line interface for loading and indexing Indx heaps.

Usage:
    heap-ingestion create --heap 0 --configuration 100
    heap-ingestion load --heap 0 --dataset movie_names.txt
    heap-ingestion load --heap 0 --file ./my_lines.txt --segment-length 120
    heap-ingestion index --heap 0
    heap-ingestion state --heap 0
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from heap_ingestion.clients.indx_client import IndxClient
from heap_ingestion.config import get_settings
from heap_ingestion.models.progress import IndexingProgress, UploadProgress
from heap_ingestion.models.segmentation import SegmentationConfig
from heap_ingestion.services.heap_console import HeapConsole
from heap_ingestion.services.text_source import PREDEFINED_DATASETS
from heap_ingestion.utils.errors import IngestionException
from heap_ingestion.utils.logging import get_logger, setup_logging

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="heap-ingestion",
        description="Create, load, index and inspect heaps on an Indx search service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Replace heap 0 with the movie names dataset and index it
  heap-ingestion delete --heap 0
  heap-ingestion create --heap 0
  heap-ingestion load --heap 0 --dataset movie_names.txt
  heap-ingestion index --heap 0

  # Against a local instance
  heap-ingestion state --url http://localhost:38171/api/
        """,
    )
    parser.add_argument(
        "--heap",
        default=settings.indx.heap_id,
        help=f"Heap (dataset) id (default: {settings.indx.heap_id})",
    )
    parser.add_argument(
        "--url",
        default=settings.indx.url,
        help=f"Indx API base URL (default: {settings.indx.url})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("state", help="Show the heap state")

    create = subparsers.add_parser("create", help="Create the heap")
    create.add_argument(
        "--configuration",
        default=settings.indx.configuration,
        help=f"Heap configuration (default: {settings.indx.configuration})",
    )

    subparsers.add_parser("delete", help="Delete the heap")
    subparsers.add_parser("save", help="Save the heap on the server for persistence")
    subparsers.add_parser("index", help="Start indexing and wait for completion")

    load = subparsers.add_parser("load", help="Read a text file and upload its lines")
    source = load.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", help="Path to a .txt file, one document per line")
    source.add_argument("--dataset", choices=PREDEFINED_DATASETS, help="Predefined dataset")
    load.add_argument(
        "--segment-length",
        type=int,
        default=settings.segmentation.target_length,
        help=f"Target segment length in characters (default: {settings.segmentation.target_length})",
    )
    load.add_argument(
        "--no-segmentation",
        action="store_true",
        help="Send each line as a single document regardless of length",
    )
    load.add_argument(
        "--skip-blank-lines",
        action=argparse.BooleanOptionalAction,
        default=settings.upload.skip_blank_lines,
        help="Do not send whitespace-only lines",
    )

    return parser


def _print_upload_progress(progress: UploadProgress) -> None:
    if progress.reset:
        print(f"\rUpload failed, progress reset: {progress.label}", flush=True)
    else:
        print(f"\rProcessed {progress.label}", end="", flush=True)


def _print_index_progress(progress: IndexingProgress) -> None:
    print(f"\rIndexing {progress.percent:.0f}%", end="", flush=True)


async def run(args: argparse.Namespace) -> int:
    segmentation = None
    if args.command == "load":
        segmentation = SegmentationConfig(
            enabled=not args.no_segmentation,
            target_length=args.segment_length,
        )

    console = HeapConsole(
        client=IndxClient(base_url=args.url),
        heap_id=args.heap,
        segmentation=segmentation,
    )

    if args.command == "state":
        state = await console.refresh_state()
        print(f"System state: {console.state_label}")
        print(json.dumps(state.model_dump(by_alias=True, mode="json"), indent=2))
    elif args.command == "create":
        await console.create(args.configuration)
        print(f"Heap {args.heap} created: {console.state_label}")
    elif args.command == "delete":
        await console.delete()
        print(f"Heap {args.heap} deleted")
    elif args.command == "save":
        await console.save()
        print(f"Heap {args.heap} saved")
    elif args.command == "load":
        result = await console.load(
            source=args.file or args.dataset,
            skip_blank_lines=args.skip_blank_lines,
            on_progress=_print_upload_progress,
        )
        print()
        print(
            f"Uploaded {result.label} documents in {result.batches_submitted} batch(es): "
            f"{console.state_label}"
        )
    elif args.command == "index":
        await console.index(on_progress=_print_index_progress)
        print()
        print(f"Heap {args.heap}: {console.state_label}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()

    try:
        return asyncio.run(run(args))
    except IngestionException as e:
        logger.error(f"{args.command} failed: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
