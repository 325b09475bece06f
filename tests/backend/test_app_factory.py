from fastapi.testclient import TestClient

from relcal_lib.main import Config, create_app
from relcal_lib.storage.interfaces import BackupManagerProtocol, DocumentStoreProtocol


def test_routes_registered(app):
    paths = {getattr(r, "path", None) for r in app.routes}
    for p in ("/api/environments.json", "/api/releases.json", "/api/holidays.json",
              "/api/backups", "/api/backups/verify", "/api/backup-settings",
              "/api/jira-tickets", "/api/health"):
        assert p in paths


def test_container_services_follow_protocols(app):
    container = app.state.container
    assert isinstance(container.get("document_store"), DocumentStoreProtocol)
    assert isinstance(container.get("backup_manager"), BackupManagerProtocol)


def test_max_backups_from_server_config(tmp_path):
    cfg_dir = tmp_path / "data" / "config"
    cfg_dir.mkdir(parents=True)
    (cfg_dir / "server_config.yml").write_text("max_backups: 4\n")
    app = create_app(Config(data_dir=str(tmp_path / "data"), static_dir=str(tmp_path / "none"),
                            configure_logging=False))
    with TestClient(app) as c:
        assert c.get('/api/backup-settings').json()['maxBackups'] == 4


def test_static_dir_mounted(tmp_path):
    static = tmp_path / "static"
    static.mkdir()
    (static / "index.html").write_text("<html>calendar</html>")
    app = create_app(Config(data_dir=str(tmp_path / "data"), static_dir=str(static),
                            configure_logging=False))
    with TestClient(app) as c:
        assert "calendar" in c.get('/').text
        # API routes are not shadowed by the static mount
        assert c.get('/api/releases.json').json() == {}
