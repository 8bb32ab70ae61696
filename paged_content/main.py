import sys

from paged_content.config.settings import Settings
from paged_content.database.connection import close_pool
from paged_content.derivatives.kinds import DerivativeKind
from paged_content.logging.logger import Log
from paged_content.processor.processor import build_processor
from paged_content.store.exceptions import StoreError
from paged_content.store.factory import StoreFactory


def main(argv: list[str] | None = None) -> int:
    """Entry point: derive for one paged content object, e.g. ``book:1 PDF OCR``."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("usage: python -m paged_content.main <object_id> [KIND ...]", file=sys.stderr)
        return 2

    settings = Settings()
    Log.configure(settings.log_level)
    try:
        kinds = [DerivativeKind.parse(code) for code in args[1:]] or None
    except ValueError as exc:
        Log.error(str(exc))
        return 2

    try:
        store = StoreFactory.create(settings)
        processor = build_processor(settings, store)
        report = processor.process(args[0], kinds)
    except StoreError as exc:
        Log.error(f"Processing {args[0]} failed: {exc}")
        return 1
    finally:
        close_pool()
    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
