# tests/conftest.py

import json
from pathlib import Path

import pytest

from kubesummary.models.summary import Summary

FIXTURES_DIR = Path(__file__).parent / "fixtures"

NODE_NAME = "test.eu-west-1.compute.internal"


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Pytest fixture to mock environment variables for the config module.

    This fixture runs automatically for every test (`autouse=True`). It uses
    monkeypatch to keep the configuration predictable and isolated from the
    actual environment.
    """
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("POD_UID_LABEL", "false")
    monkeypatch.setenv("MAX_CONCURRENT_SCRAPES", "0")
    monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)


@pytest.fixture(autouse=True)
def no_kube_config(monkeypatch):
    """
    Autouse fixture that prevents any attempt to load a real kubeconfig or
    in-cluster service account. Tests that need a client inject a mocked
    CoreV1Api into the collectors directly.
    """
    import kubesummary.core.k8s_client as k8s_client

    async def _no_config(kubeconfig_path=None) -> bool:
        return False

    monkeypatch.setattr(k8s_client, "ensure_k8s_config", _no_config)
    monkeypatch.setattr(k8s_client, "_CORE_V1_API", None)


@pytest.fixture
def summary_bytes() -> bytes:
    """Raw /stats/summary payload of a node with one pod and one container."""
    return (FIXTURES_DIR / "summary.json").read_bytes()


@pytest.fixture
def summary_dict(summary_bytes) -> dict:
    return json.loads(summary_bytes)


@pytest.fixture
def summary(summary_bytes) -> Summary:
    return Summary.model_validate_json(summary_bytes)


def make_summary(node_name: str, pods: int = 1, with_image_fs: bool = True) -> Summary:
    """Builds a small Summary for a node, with `pods` pods of one container each."""
    doc = {
        "node": {"nodeName": node_name},
        "pods": [
            {
                "podRef": {"name": f"pod-{i}", "namespace": "default", "uid": f"uid-{i}"},
                "containers": [{"name": "app", "rootfs": {"usedBytes": 1000 + i}}],
                "ephemeral-storage": {"usedBytes": 2000 + i},
            }
            for i in range(pods)
        ],
    }
    if with_image_fs:
        doc["node"]["runtime"] = {"imageFs": {"usedBytes": 5000, "capacityBytes": 10000}}
    return Summary.model_validate(doc)


@pytest.fixture
def summary_factory():
    """Returns `make_summary` so tests can build summaries for arbitrary nodes."""
    return make_summary
