"""Translation of domain errors into CLI errors."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException, ValidationError


def to_click_error(exc: DomainException) -> click.ClickException:
    message = str(exc)
    if isinstance(exc, ValidationError) and exc.errors:
        message += "\n" + "\n".join(f"  - {error}" for error in exc.errors)
    return click.ClickException(message)
