# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from podmapper.common.config import PodMapperConfig
from podmapper.common.environment import Environment
from podmapper.common.mixins import LoggerMixin
from podmapper.common.models import MetricsByCounter, SystemInfo
from podmapper.kubernetes.annotator import MetricAnnotator
from podmapper.kubernetes.index import WorkloadIndexBuilder
from podmapper.kubernetes.mig import MIGHierarchyResolver
from podmapper.kubernetes.podresources import PodResourcesClient

__all__ = ["PodMapper"]


class PodMapper(LoggerMixin):
    """Annotates GPU telemetry with the Kubernetes containers holding each GPU.

    One call to `process` is one collection cycle: query the kubelet, build a
    fresh device index, annotate the samples. Cycles must not overlap.

    Args:
        config: Pod mapper configuration.
        mig_resolver: Resolves MIG UUIDs to GPU instances. Without one, MIG
            devices are matched by UUID only.
        connection_timeout: Timeout for the kubelet connection and List call
            (default: from Environment).
    """

    def __init__(
        self,
        config: PodMapperConfig,
        mig_resolver: MIGHierarchyResolver | None = None,
        connection_timeout: float | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.config = config
        self.connection_timeout = (
            connection_timeout or Environment.KUBERNETES.CONNECTION_TIMEOUT
        )
        self.index_builder = WorkloadIndexBuilder(
            nvidia_resource_names=config.nvidia_resource_names,
            mig_resolver=mig_resolver,
        )
        self.annotator = MetricAnnotator(config)
        self.info("Kubernetes metrics collection enabled!")

    @property
    def name(self) -> str:
        return "podMapper"

    def process(self, metrics: MetricsByCounter, system_info: SystemInfo) -> None:
        """Annotate `metrics` in place for one collection cycle.

        Returns without touching `metrics` if the kubelet socket does not exist.

        Raises:
            PodResourcesConnectionError: If the kubelet socket cannot be reached.
            PodResourcesListError: If listing pod resources fails.
        """
        socket_path = self.config.pod_resources_kubelet_socket
        if not socket_path.exists():
            self.info("No Kubelet socket, ignoring")
            return

        with PodResourcesClient(
            socket_path,
            api_version=self.config.pod_resources_api_version,
            timeout=self.connection_timeout,
        ) as client:
            snapshot = client.list_pods()

        index = self.index_builder.build(
            snapshot, system_info, sharing_enabled=self.config.virtual_gpus
        )
        if self.config.virtual_gpus:
            self.info(f"Device to sharing pods mapping: {index}")
        else:
            self.debug(lambda: f"Device to pod mapping: {index}")

        self.annotator.annotate(metrics, index)
