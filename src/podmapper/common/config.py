# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from pydantic import BaseModel, ConfigDict, Field, field_validator

from podmapper.common.enums import KubernetesGPUIDType, PodResourcesAPIVersion
from podmapper.common.environment import Environment


class PodMapperConfig(BaseModel):
    """Configuration of the Kubernetes pod mapper."""

    model_config = ConfigDict(extra="forbid")

    @field_validator("nvidia_resource_names", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value

    gpu_id_type: Annotated[
        KubernetesGPUIDType,
        Field(
            description="Which sample identity is matched against the device IDs reported by the kubelet: "
            "`uid` for the GPU UUID or `device-name` for the device name (e.g. nvidia0).",
        ),
        Parameter(name="--kubernetes-gpu-id-type"),
    ] = KubernetesGPUIDType.GPU_UUID

    virtual_gpus: Annotated[
        bool,
        Field(
            description="Enable GPU sharing support. A sample is duplicated once per container sharing "
            "its device, and samples for devices without a container are dropped.",
        ),
        Parameter(name="--kubernetes-virtual-gpus"),
    ] = False

    nvidia_resource_names: Annotated[
        list[str],
        Field(
            description="Extra extended-resource names, besides nvidia.com/gpu and nvidia.com/mig-*, "
            "whose devices are mapped to pods.",
        ),
        Parameter(name="--nvidia-resource-names"),
    ] = []

    use_old_namespace: Annotated[
        bool,
        Field(
            description="Write the legacy pod_name, pod_namespace and container_name attributes "
            "instead of pod, namespace and container.",
        ),
        Parameter(name="--use-old-namespace"),
    ] = False

    pod_resources_kubelet_socket: Annotated[
        Path,
        Field(description="Path of the kubelet pod-resources unix socket."),
        Parameter(name="--pod-resources-kubelet-socket"),
    ] = Environment.KUBERNETES.POD_RESOURCES_SOCKET

    pod_resources_api_version: Annotated[
        PodResourcesAPIVersion,
        Field(description="Version of the pod-resources API served by the kubelet."),
        Parameter(name="--pod-resources-api-version"),
    ] = PodResourcesAPIVersion.V1ALPHA1
