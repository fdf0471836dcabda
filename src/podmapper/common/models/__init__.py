# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from podmapper.common.models.base_models import PodMapperBaseModel
from podmapper.common.models.pod_models import (
    ContainerDevices,
    ContainerResources,
    PodResources,
    PodResourcesSnapshot,
    WorkloadRecord,
)
from podmapper.common.models.system_models import GPUInfo, MIGDeviceInfo, SystemInfo
from podmapper.common.models.telemetry_models import (
    Counter,
    MetricsByCounter,
    TelemetrySample,
)

__all__ = [
    "ContainerDevices",
    "ContainerResources",
    "Counter",
    "GPUInfo",
    "MIGDeviceInfo",
    "MetricsByCounter",
    "PodMapperBaseModel",
    "PodResources",
    "PodResourcesSnapshot",
    "SystemInfo",
    "TelemetrySample",
    "WorkloadRecord",
]
