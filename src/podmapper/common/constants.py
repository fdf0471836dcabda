# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Constants shared by the device-ID resolver, index builder and annotator."""

import re

NVIDIA_RESOURCE_NAME = "nvidia.com/gpu"
NVIDIA_MIG_RESOURCE_PREFIX = "nvidia.com/mig-"
MIG_UUID_PREFIX = "MIG-"

# Device-plugin sharing separators. GKE uses `/vgpuN`, the NVIDIA plugin `::N`.
GKE_VIRTUAL_GPU_DEVICE_ID_SEPARATOR = "/vgpu"
NVIDIA_SHARED_DEVICE_ID_SEPARATOR = "::"

# GKE MIG device IDs, with or without GPU sharing.
GKE_MIG_DEVICE_ID_REGEX = re.compile(r"^nvidia([0-9]+)/gi([0-9]+)(/vgpu[0-9]+)?$")

# Attribute keys written onto samples. The old keys are consumed by existing
# dashboards and must not change.
POD_ATTRIBUTE = "pod"
NAMESPACE_ATTRIBUTE = "namespace"
CONTAINER_ATTRIBUTE = "container"
OLD_POD_ATTRIBUTE = "pod_name"
OLD_NAMESPACE_ATTRIBUTE = "pod_namespace"
OLD_CONTAINER_ATTRIBUTE = "container_name"
VGPU_ATTRIBUTE = "vgpu"
