import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from pdf_extractor.exceptions import ExtractionError

from .config import RewriteServiceConfig
from .exceptions import RewriteError, format_error_chain
from .logging_config import get_logger, setup_logging
from .service import RewriteService
from .settings import RewriteSettings, SettingsStore


def status_callback(message: str, percent: float) -> None:
    """Print progress updates."""
    bar_len = 30
    filled = int(bar_len * percent / 100)
    bar = "=" * filled + "-" * (bar_len - filled)
    print(f"\r[{bar}] {percent:5.1f}% - {message:<40}", end="", flush=True)
    if percent >= 100:
        print()


def load_settings(args: argparse.Namespace, config: RewriteServiceConfig) -> RewriteSettings:
    settings_path = args.settings or config.settings_path
    settings = SettingsStore(settings_path, defaults=RewriteSettings.from_env()).settings
    overrides = {}
    if args.chunk_size is not None:
        overrides["chunk_size"] = args.chunk_size
    if args.model is not None:
        overrides["model"] = args.model
    if overrides:
        settings = RewriteSettings.model_validate({**settings.model_dump(), **overrides})
    return settings


def run_dry(service: RewriteService, pdf_path: Path) -> None:
    document, chunking = service.prepare(pdf_path)
    stats = chunking.stats
    print(f"Document: {document.source_name}")
    print(f"Pages: {document.page_count}")
    print(f"Characters: {stats.total_characters:,}")
    print(f"Words: {stats.word_count:,}")
    print(f"Paragraphs: {stats.paragraph_count:,}")
    print(f"Estimated tokens: {stats.estimated_tokens:,}")
    print(f"Chunks: {chunking.total_chunks} (budget {chunking.budget} tokens)")


def run_rewrite(service: RewriteService, pdf_path: Path) -> None:
    outcome, paths = service.process_and_save(pdf_path, status_callback=status_callback)
    result = outcome.result
    print(f"\n{outcome.summary()}")
    print(f"Rewritten: {result.success_count}/{result.total_chunks} chunks")
    if result.failed_indices:
        failed = ", ".join(str(i + 1) for i in result.failed_indices)
        print(f"Kept original text for chunks: {failed}")
    print(f"Text: {paths.text_file}")
    print(f"PDF:  {paths.pdf_file}")
    print(f"\nPreview:\n{outcome.preview}")


def run_server(args: argparse.Namespace, settings: RewriteSettings, config: RewriteServiceConfig) -> None:
    import uvicorn

    from .app import create_app

    uvicorn.run(create_app(settings=settings, config=config), host=args.host, port=args.port)


def main() -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Rewrite a PDF chunk by chunk into text optimized for text-to-speech.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Rewrite a PDF with settings from the environment / .env
  pdf2speech paper.pdf -o output/

  # Only show statistics and the chunk count
  pdf2speech paper.pdf --dry-run --chunk-size 2000

  # Run the HTTP API
  pdf2speech --serve --port 8003
        """,
    )
    parser.add_argument("pdf_path", nargs="?", help="Path to the PDF file")
    parser.add_argument("-o", "--output", help="Output directory (default: data/rewriting)")
    parser.add_argument("--chunk-size", type=int, help="Maximum estimated tokens per chunk (500-20000)")
    parser.add_argument("--model", help="Model to use (default: gemini-2.5-flash)")
    parser.add_argument("--settings", help="Path to a settings JSON file")
    parser.add_argument("--dry-run", action="store_true", help="Extract and chunk only, do not call the API")
    parser.add_argument("--serve", action="store_true", help="Run FastAPI server")
    parser.add_argument("--host", default="0.0.0.0", help="Server host")
    parser.add_argument("--port", type=int, default=8003, help="Server port")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    logger = get_logger("cli")

    config = RewriteServiceConfig.from_env()
    if args.output:
        config.data_dir = args.output

    try:
        settings = load_settings(args, config)
    except ValueError as e:
        logger.error(f"Invalid settings: {e}")
        sys.exit(2)

    if args.serve:
        run_server(args, settings, config)
        return

    if not args.pdf_path:
        parser.error("pdf_path is required unless --serve is given")

    service = RewriteService(settings, config=config)
    try:
        if args.dry_run:
            run_dry(service, Path(args.pdf_path))
        else:
            run_rewrite(service, Path(args.pdf_path))
    except (ExtractionError, RewriteError) as e:
        print()
        logger.error(format_error_chain(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
