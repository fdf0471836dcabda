# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from podmapper.common.enums.base_enums import CaseInsensitiveStrEnum


class KubernetesGPUIDType(CaseInsensitiveStrEnum):
    """Which identity of a GPU sample is used to look it up in the device index."""

    GPU_UUID = "uid"
    """Match on the GPU (or MIG device) UUID reported by DCGM."""

    DEVICE_NAME = "device-name"
    """Match on the device name (e.g. nvidia0) reported by DCGM."""


class PodResourcesAPIVersion(CaseInsensitiveStrEnum):
    """Version of the kubelet pod-resources gRPC API to query."""

    V1ALPHA1 = "v1alpha1"
    V1 = "v1"
