"""Health check endpoints."""

import falcon.asgi

from ragcall.application.ports import VectorIndex


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, vector_index: VectorIndex) -> None:
        self._vector_index = vector_index

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness with index size."""
        resp.media = {
            "status": "ready",
            "index_entries": await self._vector_index.count(),
            "index_dimensions": self._vector_index.dimensions,
        }
        resp.status = falcon.HTTP_200
