"""SearchExecutor - runs queries, retrying once with a spellcheck correction."""

import logging
import re

import logfire

from solrbridge.domain.index.model.definition import IndexDefinition
from solrbridge.domain.search.model.query import StructuredQuery
from solrbridge.domain.search.model.result import SearchResultSet
from solrbridge.domain.search.service.builder import QueryBuilder
from solrbridge.domain.shared.port.solr_client import SolrClient
from solrbridge.domain.shared.service import Service

logger = logging.getLogger(__name__)

_FUZZINESS = re.compile(r"~\d+")


def strip_fuzziness(text: str) -> str:
    """Remove fuzziness annotations: ``"word~2"`` -> ``"word"``."""
    return _FUZZINESS.sub("", text)


def should_retry(query: StructuredQuery, result: SearchResultSet, retried: bool) -> bool:
    """Whether a result warrants a second attempt with the collated suggestion.

    All must hold: no retry has happened yet, spellchecking is on, the query
    follows suggestions or found nothing, and Solr returned a collation.
    """
    return (
        not retried
        and query.spellcheck
        and (query.follow_spellcheck or result.total == 0)
        and bool(result.collated_spellcheck)
    )


class SearchExecutor(Service):
    builder: QueryBuilder
    client: SolrClient

    async def execute(self, query: StructuredQuery, index: IndexDefinition) -> SearchResultSet:
        """Run ``query`` against ``index``.

        If a spellcheck retry runs, its result is returned carrying the
        collation of the first attempt. ``query`` itself is not modified.

        Raises:
            RemoteQueryError: Solr failed the request. No partial result is returned.
        """
        return await self._execute(query, index, retried=False)

    async def _execute(
        self,
        query: StructuredQuery,
        index: IndexDefinition,
        retried: bool,
    ) -> SearchResultSet:
        compiled = self.builder.build(query, index)

        with logfire.span("SearchExecutor.execute", core=index.core, retry=retried):
            try:
                raw = await self.client.select(compiled)
            except Exception as e:
                logfire.error("Search query failed", core=index.core, query=compiled.query, error=str(e))
                logger.error(f"Query '{compiled.query}' on core '{index.core}' failed: {e}")
                raise

        result = SearchResultSet.from_response(raw, index, compiled.query_terms, is_retry=retried)
        if not should_retry(query, result, retried):
            return result

        collation = result.collated_spellcheck or ""
        corrected = strip_fuzziness(collation)
        logger.debug(f"Retrying '{compiled.query}' on core '{index.core}' as '{corrected}'")

        retry = await self._execute(query.with_first_term(corrected), index, retried=True)
        return retry.with_collation(collation)
