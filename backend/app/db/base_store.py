"""
Base store — shared Supabase client access for all stores.

Base engine store with the shared procedure-call primitive.

All domain-specific stores inherit from this class to get a single
``_rpc`` entry point that invokes a named engine procedure, checks the
result against the expected shape, and translates engine errors.
Version: 1.0.0
"""

import logging
from enum import Enum
from typing import Any, Dict, List

import httpx
from postgrest.exceptions import APIError

from app.core.config import settings
from app.core.constants.search import ENGINE_BUSINESS_ERROR_CODE
from app.core.exceptions import EngineBusinessError, EngineError, EngineResultShapeError
from app.clients.supabase_client import SupabaseClient

logger = logging.getLogger("base_store")

Row = Dict[str, Any]


class ExpectedReturn(str, Enum):
    """Result shape a procedure is expected to produce."""
    SINGLE = "single"      # one row (insert acknowledgement)
    MULTIPLE = "multiple"  # one row set
    MULTI = "multi"        # several row sets, in a fixed order


class BaseStore:
    """Base class for all engine stores providing the shared procedure call."""

    def __init__(self, supabase_client: SupabaseClient | None = None) -> None:
        self._supabase_client = supabase_client or SupabaseClient(settings)

    @property
    def _client(self):
        """Get the Supabase client instance."""
        return self._supabase_client.client

    async def _rpc(
        self, procedure: str, params: Dict[str, Any], expected: ExpectedReturn
    ) -> Any:
        """Invoke an engine procedure and return its result in the expected shape."""
        try:
            response = self._client.rpc(procedure, params).execute()
        except APIError as e:
            if str(e.code) == ENGINE_BUSINESS_ERROR_CODE:
                logger.info("engine business error procedure=%s detail=%s", procedure, e.message)
                raise EngineBusinessError(e.message or "Request rejected by search engine")
            logger.error("engine error procedure=%s code=%s detail=%s", procedure, e.code, e.message)
            raise EngineError(procedure, str(e))
        except httpx.HTTPError as e:
            logger.error("engine transport error procedure=%s detail=%s", procedure, str(e))
            raise EngineError(procedure, str(e))

        return self._shape(procedure, response.data, expected)

    @staticmethod
    def _shape(procedure: str, data: Any, expected: ExpectedReturn) -> Any:
        if expected is ExpectedReturn.SINGLE:
            if isinstance(data, dict):
                return data
            if data is None or data == []:
                return None
            if isinstance(data, list) and len(data) == 1 and isinstance(data[0], dict):
                return data[0]
            raise EngineResultShapeError(procedure, "expected a single row")

        if expected is ExpectedReturn.MULTIPLE:
            if data is None:
                return []
            if isinstance(data, list) and all(isinstance(row, dict) for row in data):
                return data
            raise EngineResultShapeError(procedure, "expected one row set")

        if not isinstance(data, list) or not all(isinstance(rows, list) for rows in data):
            raise EngineResultShapeError(procedure, "expected a list of row sets")
        row_sets: List[List[Row]] = data
        return row_sets
