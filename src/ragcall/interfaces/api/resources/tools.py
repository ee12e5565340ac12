"""Tools API - list advertised tool declarations."""

import falcon.asgi

from ragcall.application.tools.registry import ToolRegistry


class ToolsResource:
    """GET /v1/tools - declarations in registration order."""

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {
            "items": [
                {
                    "name": d.name,
                    "description": d.description,
                    "parameters": d.parameter_schema,
                }
                for d in self._registry.declarations()
            ]
        }
        resp.status = falcon.HTTP_200
