class InMemorySchemaRegistry:
    def __init__(self, healthy: bool = True, healthy_after: int = 0) -> None:
        self._healthy = healthy
        self.healthy_after = healthy_after
        self.probe_calls = 0

    def set_healthy(self, healthy: bool) -> None:
        self._healthy = healthy

    def probe_health(self) -> bool:
        self.probe_calls += 1
        return self._healthy and self.probe_calls > self.healthy_after
