import argparse
import logging
import os
import sys
from typing import List, Optional

from app.core.logging import configure_logging
from client.downloader import MediaDownloader, ResolveFailed, ResolverClient
from client.storage import JsonFileStorage
from client.store import ClientStore

DEFAULT_API = os.environ.get("TIKFETCH_API", "http://localhost:8000")
DEFAULT_STORAGE = os.path.join(os.path.expanduser("~"), ".tikfetch", "storage.json")

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tikfetch", description="Download TikTok video, audio or images")
    parser.add_argument("url", nargs="?", help="TikTok post URL (long or vt./vm. short link)")
    parser.add_argument("--type", "-t", dest="media_type", choices=["video", "audio", "image"], default="video")
    parser.add_argument("--api", default=DEFAULT_API, help="Resolver API base URL")
    parser.add_argument("--out", "-o", default=".", help="Output directory")
    parser.add_argument("--storage", default=DEFAULT_STORAGE, help=argparse.SUPPRESS)
    parser.add_argument("--history", action="store_true", help="Show download history and exit")
    parser.add_argument("--clear-history", action="store_true", help="Clear download history and exit")
    parser.add_argument("--dark-mode", choices=["on", "off"], help="Persist the theme preference")
    return parser


def _print_history(store: ClientStore) -> None:
    entries = store.history
    if not entries:
        print("No downloads yet.")
        return
    for e in entries:
        print(f"[{e.type}] {e.title} - {e.url}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("WARNING")

    store = ClientStore(JsonFileStorage(args.storage)).load()

    if args.dark_mode:
        store.set_dark_mode(args.dark_mode == "on")
    if args.clear_history:
        store.clear_history()
        print("History cleared.")
        return 0
    if args.history:
        _print_history(store)
        return 0
    if not args.url:
        if args.dark_mode:
            return 0
        print("Enter a TikTok URL.", file=sys.stderr)
        return 2

    try:
        media = ResolverClient(args.api).resolve(args.url, args.media_type)
    except ResolveFailed as e:
        print(e.message, file=sys.stderr)
        return 1

    store.add_to_history(media)
    saved = MediaDownloader().save_media(media, args.out)
    for path in saved:
        print(path)
    if not saved:
        print("Opened the download link in your browser instead.", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
