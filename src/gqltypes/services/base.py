"""BaseService: common foundation for schema tooling services.

Every service receives a :class:`Schema` at construction time. The type
index (a full walk of the schema graph) is built lazily on first use and
shared by the service's operations.
"""

from __future__ import annotations

import logging

from gqltypes.domain.schema import Schema
from gqltypes.domain.traversal import TypeIndex, walk_schema

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CheckService(BaseService):
            def check(self) -> ServiceResult:
                for obj in self.index.objects():
                    ...
    """

    def __init__(self, schema: Schema) -> None:
        self._schema = schema
        self._index: TypeIndex | None = None

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def index(self) -> TypeIndex:
        """Walk the schema on first access."""
        if self._index is None:
            self._index = walk_schema(self._schema)
            logger.debug(
                "Indexed %d named types (%d failures)",
                len(self._index.types),
                len(self._index.failures),
            )
        return self._index
