import sys
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from loguru import logger


class LogPhases:
    """Processing phases used to tag log records."""

    LOADING = "loading"
    ANALYSIS = "analysis"
    PEER_COMPARISON = "peer_comparison"
    SCENARIO = "scenario"
    CHAT_CONTEXT = "chat_context"
    REPORTING = "reporting"


VALID_CONTEXT_FIELDS = {"company_id", "phase", "carbon_price"}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {extra} - {message}"


def format_record(record):
    """Console format including whichever context fields are bound."""
    format_string = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
    )

    if record["extra"].get("company_id"):
        format_string += " | <yellow>CO:{extra[company_id]}</yellow>"
    if record["extra"].get("phase"):
        format_string += " | <magenta>{extra[phase]}</magenta>"
    if record["extra"].get("carbon_price") is not None:
        format_string += " | <blue>${extra[carbon_price]}/t</blue>"

    format_string += " - <level>{message}</level>\n"

    if record["exception"]:
        format_string += "{exception}\n"

    return format_string


def setup_logging(log_level: str = "INFO", log_dir: str | None = "logs", retention_days: int = 30):
    """
    Configure Loguru with a console sink, a daily file and an error file.

    Args:
        log_level: Console logging level (files always capture DEBUG / ERROR)
        log_dir: Directory for log files, created if missing
        retention_days: How long rotated files are kept
    """
    log_path = Path(log_dir or "logs")
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()

    logger.add(sys.stderr, format=format_record, level=log_level, colorize=True)

    logger.add(
        log_path / "{time:YYYY-MM-DD}.log",
        rotation="1 day",
        retention=f"{retention_days} days",
        format=FILE_FORMAT,
        level="DEBUG",
        encoding="utf-8",
    )

    logger.add(
        log_path / "errors.log",
        level="ERROR",
        format=FILE_FORMAT,
        rotation="10 MB",
        retention=f"{retention_days} days",
        encoding="utf-8",
        backtrace=True,
        diagnose=True,
    )

    logger.debug(f"Logging initialized. Level: {log_level}, Dir: {log_path}")


@contextmanager
def log_context(**kwargs) -> Generator[None, None, None]:
    """
    Bind company/phase/price fields to every log record in the block.

    Uses ``logger.contextualize`` so nested blocks combine their fields and
    nothing leaks once a block exits.

        with log_context(company_id="ultratech", phase=LogPhases.ANALYSIS, carbon_price=9.5):
            engine.analyze_company(company, 9.5)

    Raises:
        ValueError: If a field name is not in VALID_CONTEXT_FIELDS
    """
    invalid_fields = set(kwargs) - VALID_CONTEXT_FIELDS
    if invalid_fields:
        raise ValueError(f"Invalid context field(s): {invalid_fields}. Valid fields are: {VALID_CONTEXT_FIELDS}")

    with logger.contextualize(**kwargs):
        yield
