"""
REST API endpoints for the persisted JSON documents.

Each document in `DOCUMENT_NAMES` is served at `/api/<name>.json`:

    GET   returns the stored JSON (or `{}`) with an `ETag` header
    POST  replaces the document; honours `If-Match` and `X-Max-Backups`

Writes are blocking file operations and run in the thread pool, one worker
per request. There is no locking: concurrent writers are serialised only by
the `If-Match` precondition.
"""
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, Response
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect

from relcal_lib.services.resolver import resolve_service
from relcal_lib.storage.errors import (
    DocumentWriteError,
    InvalidJSON,
    PreconditionFailed,
    SchemaInvalid,
)
from . import DOCUMENT_NAMES

import logging
router = APIRouter()
logger = logging.getLogger(__name__)

MAX_BACKUPS_HEADER = 'X-Max-Backups'


def parse_max_backups(value: Optional[str], default: int) -> int:
    """Return the header value when it is a positive integer, else `default`."""
    if not value:
        return default
    try:
        n = int(value)
    except ValueError:
        return default
    return n if n > 0 else default


def _get_document(name: str):
    async def api_document_get(request: Request):
        store = resolve_service(request, 'document_store')
        try:
            data, etag = await run_in_threadpool(store.read_with_etag, name)
        except OSError as e:
            logger.error("Error reading %s: %s", name, e, exc_info=True)
            raise HTTPException(status_code=500, detail=f"Error reading file: {e}")
        return Response(content=data, media_type='application/json', headers={'ETag': etag})

    api_document_get.__name__ = f"api_{name}_get"
    return api_document_get


def _post_document(name: str):
    async def api_document_post(request: Request):
        store = resolve_service(request, 'document_store')
        config = resolve_service(request, 'config')
        try:
            body = await request.body()
        except ClientDisconnect as e:
            logger.warning("Error reading request body for %s: %s", name, e)
            raise HTTPException(status_code=400, detail='Error reading request body')

        precondition = request.headers.get('If-Match') or None
        max_backups = parse_max_backups(request.headers.get(MAX_BACKUPS_HEADER), config.max_backups)

        try:
            etag = await run_in_threadpool(store.write, name, body, precondition, max_backups)
        except (InvalidJSON, SchemaInvalid) as e:
            raise HTTPException(status_code=400, detail=str(e))
        except PreconditionFailed as e:
            raise HTTPException(status_code=412, detail='Precondition Failed', headers={'ETag': e.current_etag})
        except DocumentWriteError as e:
            raise HTTPException(status_code=500, detail=str(e))

        return Response(
            content=b'{"success": true, "message": "File updated successfully with backup"}',
            media_type='application/json',
            headers={'ETag': etag},
        )

    api_document_post.__name__ = f"api_{name}_post"
    return api_document_post


for _name in DOCUMENT_NAMES:
    router.add_api_route(f'/{_name}.json', _get_document(_name), methods=['GET'])
    router.add_api_route(f'/{_name}.json', _post_document(_name), methods=['POST'])
