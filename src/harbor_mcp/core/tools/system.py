import time

from harbor_mcp.core.client import HarborClient
from harbor_mcp.core.models import OverallHealth, SystemInfo


async def get_system_info(client: HarborClient) -> dict:
    """
    Connectivity and version check against the Harbor instance.
    Returns the Harbor version, auth mode and round-trip latency.
    """
    start = time.perf_counter()
    info = await client.request_model(
        SystemInfo, "GET", "/systeminfo", tool="get_system_info"
    )
    latency_ms = (time.perf_counter() - start) * 1000

    return {
        "status": "ok",
        "latency_ms": round(latency_ms, 2),
        "harbor_version": info.harbor_version,
        "auth_mode": info.auth_mode,
        "read_only": info.read_only,
        "storage_provider": info.registry_storage_provider_name,
        "instance_url": client.base_url,
    }


async def check_health(client: HarborClient) -> dict:
    health = await client.request_model(
        OverallHealth, "GET", "/health", tool="check_health"
    )
    return {
        "status": health.status,
        "components": {c.name: c.status for c in health.components},
        "unhealthy": health.unhealthy,
    }
