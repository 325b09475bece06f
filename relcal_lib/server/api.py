from fastapi import APIRouter, Request
from relcal_lib.services.resolver import resolve_service
from .health import get_health

router = APIRouter()


@router.get('/health')
async def api_health(request: Request):
    server_cfg = resolve_service(request, 'server_config')
    return get_health(server_cfg.get('server_name'))
