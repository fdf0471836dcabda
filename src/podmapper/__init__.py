# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Kubernetes pod attribution for DCGM GPU telemetry."""

from podmapper.common.config import PodMapperConfig
from podmapper.common.enums import KubernetesGPUIDType, PodResourcesAPIVersion
from podmapper.common.models import (
    Counter,
    GPUInfo,
    MetricsByCounter,
    SystemInfo,
    TelemetrySample,
    WorkloadRecord,
)
from podmapper.kubernetes import PodMapper

__all__ = [
    "Counter",
    "GPUInfo",
    "KubernetesGPUIDType",
    "MetricsByCounter",
    "PodMapper",
    "PodMapperConfig",
    "PodResourcesAPIVersion",
    "SystemInfo",
    "TelemetrySample",
    "WorkloadRecord",
]
