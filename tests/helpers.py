from datetime import datetime, timedelta
from typing import Any

from starlette.testclient import TestClient

from relcal_lib.services.container import ServiceContainer


def register_service_on_client(client: TestClient, name: str, instance: Any) -> None:
    """Register a service instance into the app's DI container for tests.

    Usage in tests:
        from tests.helpers import register_service_on_client
        register_service_on_client(client, 'tracker_client', FakeTracker())
    """
    container = getattr(client.app.state, 'container', None)
    if container is None:
        container = ServiceContainer()
        client.app.state.container = container

    container.register_singleton(name, instance)


def register_services_on_client(client: TestClient, services: dict[str, Any]) -> None:
    for name, inst in services.items():
        register_service_on_client(client, name, inst)


class FakeClock:
    """Callable clock that advances one second per call."""

    def __init__(self, start: datetime = datetime(2025, 4, 15, 9, 0, 0)) -> None:
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current
