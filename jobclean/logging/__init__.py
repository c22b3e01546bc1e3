"""Structured logging for the cleaning pipeline and job normalization.

Modules log through ``get_logger(__name__, component=...)`` and pass a
dotted ``event`` name in ``extra`` (``cleaning.stage.failed``,
``salary.extracted``). The component tells apart records from the cleaner,
the salary extractor, the normalizer and the CLI when they share a stream.
"""

import logging
from typing import Optional, Union

from .context import log_context


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """Adds a fixed ``component`` field; per-call ``extra`` wins on conflict."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Return the named logger, wrapped to tag ``component`` when one is given.

    Example:
        >>> logger = get_logger(__name__, component="cleaning")
        >>> logger.debug("Description cleaned", extra={"event": "cleaning.description.cleaned"})
    """
    logger = logging.getLogger(name)
    if not component:
        return logger
    return ComponentLoggerAdapter(logger, {"component": component})


__all__ = ["ComponentLoggerAdapter", "get_logger", "log_context"]
