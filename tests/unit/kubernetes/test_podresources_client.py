# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path

import grpc
import pytest

from podmapper.common.enums import PodResourcesAPIVersion
from podmapper.common.exceptions import (
    PodResourcesConnectionError,
    PodResourcesError,
    PodResourcesListError,
)
from podmapper.kubernetes.podresources import (
    PodResourcesClient,
    get_pod_resources_messages,
    snapshot_from_proto,
)
from tests.harness.fake_pod_resources_server import (
    FakePodResourcesServer,
    make_snapshot,
    snapshot_to_proto,
)
from tests.harness.kubernetes_helpers import GPU_UUID


class TestPodResourcesMessages:
    @pytest.mark.parametrize(
        "api_version,expected_method",
        [
            (PodResourcesAPIVersion.V1ALPHA1, "/v1alpha1.PodResourcesLister/List"),
            (PodResourcesAPIVersion.V1, "/v1.PodResourcesLister/List"),
        ],
    )  # fmt: skip
    def test_list_method(self, api_version, expected_method):
        assert get_pod_resources_messages(api_version).list_method == expected_method

    def test_messages_are_built_once(self):
        assert get_pod_resources_messages(
            PodResourcesAPIVersion.V1
        ) is get_pod_resources_messages(PodResourcesAPIVersion.V1)

    def test_snapshot_from_proto(self):
        snapshot = make_snapshot("nvidia.com/gpu", [GPU_UUID, "GPU-b"], namespace="ml")
        response = snapshot_to_proto(snapshot, PodResourcesAPIVersion.V1ALPHA1)

        wire = response.SerializeToString()
        decoded = get_pod_resources_messages(
            PodResourcesAPIVersion.V1ALPHA1
        ).list_response.FromString(wire)

        assert snapshot_from_proto(decoded) == snapshot


class TestPodResourcesClientTarget:
    def test_absolute_path(self):
        client = PodResourcesClient("/var/lib/kubelet/pod-resources/kubelet.sock")
        assert client.target == "unix:///var/lib/kubelet/pod-resources/kubelet.sock"

    def test_relative_path(self):
        assert PodResourcesClient("kubelet.sock").target == "unix:kubelet.sock"

    def test_default_timeout_from_environment(self, monkeypatch):
        from podmapper.common.environment import Environment

        monkeypatch.setattr(Environment.KUBERNETES, "CONNECTION_TIMEOUT", 3.5)

        assert PodResourcesClient("kubelet.sock").timeout == 3.5
        assert PodResourcesClient("kubelet.sock", timeout=1.0).timeout == 1.0


class TestPodResourcesClient:
    """Test the client against an in-process pod-resources server."""

    @pytest.fixture
    def socket_path(self, socket_dir) -> Path:
        return socket_dir / "kubelet.sock"

    @pytest.mark.parametrize("api_version", list(PodResourcesAPIVersion))
    def test_list_pods(self, socket_path, api_version):
        snapshot = make_snapshot("nvidia.com/gpu", [GPU_UUID, f"{GPU_UUID}::1"])

        with (
            FakePodResourcesServer(socket_path, snapshot, api_version) as server,
            PodResourcesClient(
                socket_path, api_version=api_version, timeout=5.0
            ) as client,
        ):
            result = client.list_pods()

        assert result == snapshot
        assert server.list_calls == 1

    def test_list_pods_connects_lazily(self, socket_path):
        snapshot = make_snapshot("nvidia.com/gpu", [GPU_UUID])

        with FakePodResourcesServer(socket_path, snapshot):
            client = PodResourcesClient(socket_path, timeout=5.0)
            try:
                assert client.list_pods() == snapshot
            finally:
                client.close()

    def test_list_failure_raises_list_error(self, socket_path):
        with FakePodResourcesServer(socket_path) as server:
            server.abort_code = grpc.StatusCode.UNAVAILABLE
            with (
                PodResourcesClient(socket_path, timeout=5.0) as client,
                pytest.raises(PodResourcesListError, match="failure getting pod resources"),
            ):
                client.list_pods()

    def test_api_version_mismatch_raises_list_error(self, socket_path):
        with (
            FakePodResourcesServer(
                socket_path, api_version=PodResourcesAPIVersion.V1
            ),
            PodResourcesClient(
                socket_path,
                api_version=PodResourcesAPIVersion.V1ALPHA1,
                timeout=5.0,
            ) as client,
            pytest.raises(PodResourcesListError),
        ):
            client.list_pods()

    def test_unreachable_socket_raises_connection_error(self, socket_path):
        socket_path.write_text("not a socket")

        with pytest.raises(PodResourcesConnectionError) as exc_info:
            PodResourcesClient(socket_path, timeout=0.2).connect()

        assert isinstance(exc_info.value, PodResourcesError)
        assert str(socket_path) in str(exc_info.value)
        assert "failure connecting to" in str(exc_info.value)

    def test_close_is_idempotent(self, socket_path):
        with FakePodResourcesServer(socket_path):
            client = PodResourcesClient(socket_path, timeout=5.0)
            client.connect()
            client.close()
            client.close()

        assert client._channel is None
