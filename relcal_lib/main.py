"""Application factory for the release calendar FastAPI app.

This module exposes `create_app(config: Config) -> FastAPI` which performs
all setup (logging, config loading, store composition, middleware and router
registration). Nothing happens at import time so tests can construct
isolated apps against a temporary data directory.

    from relcal_lib.main import create_app, Config
    app = create_app(Config(data_dir="data"))
"""
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from relcal_lib.bootstrap import bootstrap_server
from relcal_lib.config.config import max_backups_from, server_config_path
from relcal_lib.logging_config import configure_logging
from relcal_lib.storage import BackupManager, DocumentStore
from relcal_lib.storage.document_store import DEFAULT_MAX_BACKUPS


@dataclass
class Config:
    data_dir: str = "data"
    # Defaults to <data_dir>/backups
    backup_dir: Optional[str] = None
    # None: take `max_backups` from server_config.yml, else DEFAULT_MAX_BACKUPS
    max_backups: Optional[int] = None
    static_dir: str = "static"
    log_file: Optional[str] = None
    tracker_config: str = "jira-config.json"
    configure_logging: bool = True

    def resolved_backup_dir(self) -> Path:
        if self.backup_dir:
            return Path(self.backup_dir)
        return Path(self.data_dir) / "backups"


def create_app(config: Config) -> FastAPI:
    """Create and return a configured FastAPI application."""
    if config.configure_logging:
        logger = configure_logging(server_config_path(config.data_dir), config.log_file)
    else:
        logger = logging.getLogger(__name__)

    server_cfg = bootstrap_server(config.data_dir, logger)
    if config.max_backups is None:
        config = replace(config, max_backups=max_backups_from(server_cfg, DEFAULT_MAX_BACKUPS))

    # Compose storage
    backup_manager = BackupManager(config.resolved_backup_dir())
    document_store = DocumentStore(config.data_dir, backup_manager)

    from relcal_lib.tickets import TicketService
    from relcal_lib.tickets.jira_client import JiraClient

    from relcal_lib.services import ServiceContainer

    container = ServiceContainer()
    container.register_singleton("config", config)
    container.register_singleton("server_config", server_cfg)
    container.register_singleton("backup_manager", backup_manager)
    container.register_singleton("document_store", document_store)
    container.register_factory("tracker_client", JiraClient)
    container.register_factory(
        "ticket_service",
        lambda: TicketService(
            Path(config.data_dir) / config.tracker_config,
            container.get("tracker_client"),
        ),
    )

    app = FastAPI(title="Release Calendar Server")
    app.state.container = container

    from relcal_lib.middleware import RequestLogMiddleware
    app.add_middleware(RequestLogMiddleware)

    # Router registration: import routers here to avoid import-time side-effects
    from relcal_lib.documents.api import router as documents_router
    from relcal_lib.backups.api import router as backups_router
    from relcal_lib.tickets.api import router as tickets_router
    from relcal_lib.server.api import router as server_router

    app.include_router(documents_router, prefix='/api')
    app.include_router(backups_router, prefix='/api')
    app.include_router(tickets_router, prefix='/api')
    app.include_router(server_router, prefix='/api')

    # The calendar UI is served from static_dir when present; mounted last so
    # it does not shadow /api routes.
    if Path(config.static_dir).is_dir():
        app.mount("/", StaticFiles(directory=config.static_dir, html=True), name="static")
    else:
        logger.info("Static directory %s not found; UI not served", config.static_dir)

    logger.info("Serving documents from %s (backups in %s, max %d)",
                config.data_dir, config.resolved_backup_dir(), config.max_backups)
    return app
