"""Document ingestion API resource."""

import logging

import falcon.asgi

from ragcall.application.dto.document_dto import DocumentInput
from ragcall.application.use_cases.ingestion.ingest_document import IngestDocumentUseCase
from ragcall.domain.exceptions import RagCallError
from ragcall.interfaces.api.resources.errors import respond_with_error

logger = logging.getLogger(__name__)


def _part_filename(part: object, fallback_index: int) -> str:
    """Filename of a multipart part, or file_N when missing."""
    raw = (getattr(part, "filename", None) or "").strip()
    return raw or f"file_{fallback_index}"


class DocumentsResource:
    """POST /v1/documents - ingest document (JSON or multipart with files)."""

    def __init__(self, ingest_document: IngestDocumentUseCase) -> None:
        self._ingest_document = ingest_document

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """JSON: one document by content or location; multipart: one document per file."""
        content_type = req.content_type or ""
        if "multipart/form-data" in content_type:
            await self._handle_multipart(req, resp)
            return

        try:
            body = await req.get_media()
            metadata = body.get("metadata") or {}
            if not isinstance(metadata, dict):
                raise ValueError("metadata must be an object")
            location = body.get("location")
            if location is None:
                identifier = body["id"]
                content = body["content"]
                if not isinstance(content, str):
                    raise ValueError("content must be a string")
            elif not isinstance(location, str):
                raise ValueError("location must be a string")
        except (KeyError, ValueError, AttributeError, falcon.MediaMalformedError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            if location is not None:
                identifier = body.get("id") or location
                count = await self._ingest_document.execute_from_location(
                    location, metadata=metadata, identifier=identifier
                )
            else:
                count = await self._ingest_document.execute(
                    DocumentInput(
                        identifier=identifier,
                        data=content.encode("utf-8"),
                        filename=body.get("filename"),
                        metadata=metadata,
                    )
                )
        except RagCallError as e:
            respond_with_error(resp, e)
            return
        resp.media = {"id": identifier, "chunks": count}
        resp.status = falcon.HTTP_201

    async def _handle_multipart(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Handle multipart form: one or more files, ingested concurrently."""
        try:
            form = await req.get_media()
        except falcon.MediaMalformedError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid multipart: {e}"}
            return
        documents: list[DocumentInput] = []
        file_index = 0
        async for part in form:
            if (part.name or "") not in ("files", "files[]"):
                continue
            data = await part.get_data()
            if not data:
                continue
            file_index += 1
            filename = _part_filename(part, file_index)
            documents.append(
                DocumentInput(
                    identifier=filename,
                    data=bytes(data),
                    filename=filename,
                    content_type=part.content_type,
                )
            )
        if not documents:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "At least one file required"}
            return

        reports = await self._ingest_document.execute_many(documents)
        resp.media = {
            "documents": [
                {"id": r.identifier, "chunks": r.chunk_count} for r in reports if r.ok
            ],
            "errors": [{"id": r.identifier, "error": r.error} for r in reports if not r.ok],
        }
        resp.status = falcon.HTTP_201
