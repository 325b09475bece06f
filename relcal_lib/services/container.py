from typing import Any, Callable, Dict, Iterable


class ServiceContainer:
    """A tiny, explicit DI container for the services composed in `create_app`.

    Services are registered by name either as ready instances or as factories.
    Factories run on first `get` and their result is kept as a singleton, so
    optional collaborators (the ticket tracker client) are only built when a
    request needs them.
    """

    def __init__(self) -> None:
        self._singletons: Dict[str, Any] = {}
        self._factories: Dict[str, Callable[[], Any]] = {}

    def register_singleton(self, key: str, instance: Any) -> None:
        self._singletons[key] = instance

    def register_factory(self, key: str, factory: Callable[[], Any]) -> None:
        self._singletons.pop(key, None)
        self._factories[key] = factory

    def get(self, key: str) -> Any:
        if key in self._singletons:
            return self._singletons[key]
        if key in self._factories:
            inst = self._factories[key]()
            self._singletons[key] = inst
            return inst
        raise KeyError(f"No service registered for key '{key}'")

    def names(self) -> Iterable[str]:
        return sorted(set(self._singletons) | set(self._factories))
