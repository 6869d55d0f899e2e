"""Translate catalog exceptions into click errors with stable exit codes."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import click
import structlog

from catalog.domain.exceptions import DomainException, InfrastructureError, error_kind

logger = structlog.get_logger(__name__)

EXIT_CODES = {
    "internal": 1,
    "validation": 2,
    "conflict": 3,
    "not_found": 4,
}


@contextmanager
def reported_errors() -> Iterator[None]:
    try:
        yield
    except DomainException as exc:
        error = click.ClickException(str(exc))
        error.exit_code = EXIT_CODES[error_kind(exc)]
        raise error from exc
    except InfrastructureError as exc:
        logger.error("command_failed", error=str(exc), error_type=type(exc).__name__)
        error = click.ClickException("internal error, see logs")
        error.exit_code = EXIT_CODES["internal"]
        raise error from exc
