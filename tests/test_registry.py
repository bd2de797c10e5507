from __future__ import annotations

import httpx
import pytest

from kbootstrap.registries.http import HttpSchemaRegistry
from kbootstrap.registries.memory import InMemorySchemaRegistry


def _registry(handler) -> HttpSchemaRegistry:
	client = httpx.Client(base_url="http://registry:8081", transport=httpx.MockTransport(handler))
	return HttpSchemaRegistry(base_url="http://registry:8081", client=client)


@pytest.mark.parametrize("status", [200, 204])
def test_2xx_is_healthy(status: int):
	registry = _registry(lambda request: httpx.Response(status))
	assert registry.probe_health() is True


@pytest.mark.parametrize("status", [301, 404, 500, 503])
def test_non_2xx_is_unhealthy(status: int):
	registry = _registry(lambda request: httpx.Response(status))
	assert registry.probe_health() is False


def test_transport_error_is_unhealthy():
	def handler(request):
		raise httpx.ConnectError("connection refused", request=request)

	registry = _registry(handler)
	assert registry.probe_health() is False


def test_timeout_is_unhealthy():
	def handler(request):
		raise httpx.ReadTimeout("timed out", request=request)

	assert _registry(handler).probe_health() is False


def test_invalid_url_is_unhealthy():
	def handler(request):
		raise httpx.InvalidURL("invalid non-printable ASCII character in URL")

	assert _registry(handler).probe_health() is False


def test_probes_health_path():
	seen = []

	def handler(request):
		seen.append(request.url)
		return httpx.Response(200, json={})

	client = httpx.Client(base_url="http://registry:8081", transport=httpx.MockTransport(handler))
	registry = HttpSchemaRegistry(base_url="http://registry:8081", health_path="/subjects", client=client)
	registry.probe_health()

	assert str(seen[0]) == "http://registry:8081/subjects"


def test_context_manager_closes_client():
	client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
	with HttpSchemaRegistry(client=client):
		pass
	assert client.is_closed


class TestInMemorySchemaRegistry:
	def test_healthy_by_default(self):
		registry = InMemorySchemaRegistry()
		assert registry.probe_health() is True
		assert registry.probe_calls == 1

	def test_healthy_after_some_probes(self):
		registry = InMemorySchemaRegistry(healthy_after=2)
		assert [registry.probe_health() for _ in range(3)] == [False, False, True]

	def test_set_healthy(self):
		registry = InMemorySchemaRegistry(healthy=False)
		assert registry.probe_health() is False
		registry.set_healthy(True)
		assert registry.probe_health() is True
