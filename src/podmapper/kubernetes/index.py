# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Construction of the device index from a pod-resources snapshot."""

from collections.abc import Iterable, Iterator

from podmapper.common.constants import (
    NVIDIA_MIG_RESOURCE_PREFIX,
    NVIDIA_RESOURCE_NAME,
)
from podmapper.common.mixins import LoggerMixin
from podmapper.common.models import PodResourcesSnapshot, SystemInfo, WorkloadRecord
from podmapper.kubernetes.device_ids import DeviceIDResolver
from podmapper.kubernetes.mig import MIGHierarchyResolver

__all__ = [
    "DeviceToPod",
    "DeviceToSharingPods",
    "WorkloadIndexBuilder",
    "is_nvidia_resource",
]

DeviceToPod = dict[str, WorkloadRecord]
"""Device key to the single container holding the device (last writer wins)."""

DeviceToSharingPods = dict[str, list[WorkloadRecord]]
"""Device key to every container sharing the device, in kubelet enumeration order."""


def is_nvidia_resource(resource_name: str, nvidia_resource_names: Iterable[str]) -> bool:
    """Return whether devices of `resource_name` are GPUs that should be mapped.

    Accepts the default NVIDIA resource, any allow-listed name, and MIG resources.
    """
    if resource_name == NVIDIA_RESOURCE_NAME or resource_name in nvidia_resource_names:
        return True
    # MIG resources appear differently than GPU resources
    return resource_name.startswith(NVIDIA_MIG_RESOURCE_PREFIX)


class WorkloadIndexBuilder(LoggerMixin):
    """Builds the device index that maps device keys to the containers holding them.

    The index is rebuilt from scratch for every collection cycle.

    Args:
        nvidia_resource_names: Extended-resource names accepted in addition to
            `nvidia.com/gpu` and `nvidia.com/mig-*`.
        mig_resolver: Resolves MIG UUIDs so MIG devices are also keyed by GPU instance.
    """

    def __init__(
        self,
        nvidia_resource_names: Iterable[str] = (),
        mig_resolver: MIGHierarchyResolver | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.nvidia_resource_names = frozenset(nvidia_resource_names)
        self.mig_resolver = mig_resolver

    def build(
        self,
        snapshot: PodResourcesSnapshot,
        system_info: SystemInfo,
        sharing_enabled: bool,
    ) -> DeviceToPod | DeviceToSharingPods:
        """Build the index for one cycle, in sharing or non-sharing form."""
        if sharing_enabled:
            return self.build_device_to_sharing_pods(snapshot, system_info)
        return self.build_device_to_pod(snapshot, system_info)

    def build_device_to_pod(
        self, snapshot: PodResourcesSnapshot, system_info: SystemInfo
    ) -> DeviceToPod:
        """Map each device key to one container.

        If two device IDs derive the same key, the one enumerated later wins.
        """
        device_to_pod: DeviceToPod = {}
        for key, record in self._iter_keyed_records(snapshot, system_info):
            device_to_pod[key] = record
        return device_to_pod

    def build_device_to_sharing_pods(
        self, snapshot: PodResourcesSnapshot, system_info: SystemInfo
    ) -> DeviceToSharingPods:
        """Map each device key to every container using it."""
        device_to_pods: DeviceToSharingPods = {}
        for key, record in self._iter_keyed_records(snapshot, system_info):
            device_to_pods.setdefault(key, []).append(record)
        return device_to_pods

    def _iter_keyed_records(
        self, snapshot: PodResourcesSnapshot, system_info: SystemInfo
    ) -> Iterator[tuple[str, WorkloadRecord]]:
        resolver = DeviceIDResolver(system_info, self.mig_resolver)

        for pod in snapshot.pod_resources:
            for container in pod.containers:
                for device in container.devices:
                    if not is_nvidia_resource(
                        device.resource_name, self.nvidia_resource_names
                    ):
                        self.trace(
                            lambda: f"Ignoring resource {device.resource_name} "
                            f"of {pod.namespace}/{pod.name}/{container.name}"
                        )
                        continue

                    for device_id in device.device_ids:
                        resolved = resolver.resolve(device_id)
                        record = WorkloadRecord(
                            name=pod.name,
                            namespace=pod.namespace,
                            container=container.name,
                            vgpu=resolved.vgpu or "",
                        )
                        for key in resolved.keys:
                            yield key, record
