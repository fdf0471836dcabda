# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Models for the kubelet pod-resources snapshot and the workloads derived from it."""

from pydantic import ConfigDict, Field

from podmapper.common.models.base_models import PodMapperBaseModel


class ContainerDevices(PodMapperBaseModel):
    """Devices of one extended resource assigned to a container."""

    resource_name: str = Field(..., description="e.g. nvidia.com/gpu")
    device_ids: list[str] = Field(default_factory=list)


class ContainerResources(PodMapperBaseModel):
    name: str
    devices: list[ContainerDevices] = Field(default_factory=list)


class PodResources(PodMapperBaseModel):
    name: str
    namespace: str
    containers: list[ContainerResources] = Field(default_factory=list)


class PodResourcesSnapshot(PodMapperBaseModel):
    """Result of one pod-resources List call."""

    pod_resources: list[PodResources] = Field(default_factory=list)


class WorkloadRecord(PodMapperBaseModel):
    """The container holding a device, as written onto telemetry samples."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Pod name")
    namespace: str = Field(..., description="Pod namespace")
    container: str = Field(..., description="Container name")
    vgpu: str = Field(
        default="", description="Shared GPU slice index, empty when not shared"
    )
