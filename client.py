import argparse
import logging
import sys

from translator_api import crud
from translator_api.core.config import settings
from translator_api.core.errors import RecordNotSavedError, StoreError, TranslationAppError, UpstreamError
from translator_api.core.translator import SUPPORTED_MODELS, Translator
from translator_api.db.session import SessionLocal, init_db

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger(__name__)


def render_history(records) -> str:
    if not records:
        return "No previous translations."
    blocks = []
    for record in records:
        blocks.append(
            f"Original: {record.original_message}\n"
            f"Translated: {record.translated_message}\n"
            f"Language: {record.language}\n"
            f"Model: {record.model}"
        )
    return "\n\n".join(blocks)


def run_translate(translator: Translator, store: crud.RecordStore, message: str, language: str, model: str) -> int:
    """Translate, show the result, then re-read and show the history."""
    try:
        outcome = translator.translate(message, language, model)
    except RecordNotSavedError as e:
        print(e.translated_text)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except UpstreamError:
        print("Error: Translation failed. Please try again.", file=sys.stderr)
        return 1
    except TranslationAppError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(outcome.translated_text)
    print("\nPrevious Translations\n")
    return run_history(store)


def run_history(store: crud.RecordStore) -> int:
    try:
        records = store.list_recent(settings.HISTORY_LIMIT)
    except StoreError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    print(render_history(records))
    return 0


def run_models() -> int:
    for model, languages in SUPPORTED_MODELS.items():
        print(f"{model}: {', '.join(languages)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Translate text and keep a history of translations.")
    sub = parser.add_subparsers(dest="command", required=True)

    tr = sub.add_parser("translate", help="translate a message and record it")
    tr.add_argument("message")
    tr.add_argument("--model", default="deepl", choices=sorted(SUPPORTED_MODELS))
    tr.add_argument("--language", default="French")

    sub.add_parser("history", help="show the most recent translations")
    sub.add_parser("models", help="list models and their languages")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "models":
        return run_models()

    init_db()
    with SessionLocal() as db:
        store = crud.translation_store(db)
        if args.command == "history":
            return run_history(store)
        translator = Translator(store=store)
        return run_translate(translator, store, args.message, args.language, args.model)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Client stopped by user.")
