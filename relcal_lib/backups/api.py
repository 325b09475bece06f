"""
REST API endpoints for document backups.

    GET    /api/backups?filename=<name>   {filename, checksum, content}
    GET    /api/backups?prefix=<prefix>   [filename, ...]
    DELETE /api/backups  {"filename": ...}
    GET    /api/backups/verify?filename=<name>
    GET    /api/backup-settings           {maxBackups, backupDir}

Filenames are reduced to their last path component before use.
"""
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ValidationError
from starlette.concurrency import run_in_threadpool

from relcal_lib.services.resolver import resolve_service
from relcal_lib.storage.errors import BackupError

import logging
router = APIRouter()
logger = logging.getLogger(__name__)


class BackupDeletePayload(BaseModel):
    filename: str = ''


@router.get('/backups')
async def api_backups_get(request: Request):
    backups = resolve_service(request, 'backup_manager')
    filename = request.query_params.get('filename')
    if filename:
        try:
            data, checksum = await run_in_threadpool(backups.fetch, filename)
        except BackupError as e:
            raise HTTPException(status_code=500, detail=f"Error reading backup: {e}")
        return {
            'filename': backups.sanitize(filename),
            'checksum': checksum,
            'content': data.decode('utf-8', errors='replace'),
        }

    prefix = request.query_params.get('prefix')
    if not prefix:
        raise HTTPException(status_code=400, detail="Missing 'prefix' parameter")
    try:
        return await run_in_threadpool(backups.list, prefix)
    except BackupError as e:
        logger.error("Error listing backups for %s: %s", prefix, e)
        raise HTTPException(status_code=500, detail=f"Error listing backups: {e}")


@router.get('/backups/verify')
async def api_backups_verify(request: Request):
    backups = resolve_service(request, 'backup_manager')
    filename = request.query_params.get('filename')
    if not filename:
        raise HTTPException(status_code=400, detail="Missing 'filename' parameter")
    try:
        verified = await run_in_threadpool(backups.verify, filename)
    except BackupError as e:
        raise HTTPException(status_code=500, detail=f"Error verifying backup: {e}")
    return {'filename': backups.sanitize(filename), 'verified': verified}


@router.delete('/backups')
async def api_backups_delete(request: Request):
    backups = resolve_service(request, 'backup_manager')
    try:
        payload = BackupDeletePayload.model_validate(await request.json())
    except (ValueError, ValidationError):
        raise HTTPException(status_code=400, detail='Invalid request body')
    if not payload.filename:
        raise HTTPException(status_code=400, detail='Missing filename')

    try:
        name = await run_in_threadpool(backups.delete, payload.filename)
    except BackupError as e:
        raise HTTPException(status_code=500, detail=f"Error deleting backup: {e}")
    logger.info("Deleted backup %s on request", name)
    return {'success': True, 'message': 'Backup deleted successfully'}


@router.get('/backup-settings')
async def api_backup_settings(request: Request):
    config = resolve_service(request, 'config')
    return {'maxBackups': config.max_backups, 'backupDir': str(config.resolved_backup_dir())}
