"""Resolution of raw search text into a QueryDescriptor."""

import logging
import re
from typing import Protocol

from schemas.query import QueryDescriptor

logger = logging.getLogger(__name__)

YEAR_QUERY = re.compile(r"[0-9]{4}")


class QueryTranslator(Protocol):
    """Natural-language bridge that turns free text into a filter.

    Implementations raise on any failure; the resolver owns the fallback.
    """

    def translate(self, text: str) -> QueryDescriptor:
        ...


class QueryResolver:
    """Resolves search box text into a QueryDescriptor.

    A bare four-digit query is a year and never reaches the translator.
    Anything else is sent to the translator once; if there is no
    translator, or it fails in any way, the query falls back to a
    lower-cased substring match.

    Example:
        with GeminiClient(config) as client:
            resolver = QueryResolver(client)
            descriptor = resolver.resolve("omnibus issues from 1995")
    """

    def __init__(self, translator: QueryTranslator | None = None):
        self.translator = translator

    def resolve(self, raw_query: str) -> QueryDescriptor:
        """Resolve raw query text.

        Args:
            raw_query: Text typed by the user

        Returns:
            A QueryDescriptor; this method never raises
        """
        if not raw_query.strip():
            return QueryDescriptor()

        if YEAR_QUERY.fullmatch(raw_query):
            return QueryDescriptor(year=int(raw_query))

        fallback = QueryDescriptor(text=raw_query.lower())

        if self.translator is None:
            logger.debug("No query translator configured; using substring match")
            return fallback

        try:
            descriptor = self.translator.translate(raw_query)
        except Exception as e:
            logger.warning(f"Query translation failed, using substring match: {e}")
            return fallback

        if not isinstance(descriptor, QueryDescriptor):
            logger.warning(
                f"Query translator returned {type(descriptor).__name__}, "
                "using substring match"
            )
            return fallback

        logger.debug(f"Translated {raw_query!r} to {descriptor.model_dump(exclude_none=True)}")
        return descriptor
