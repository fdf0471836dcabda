# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Mapping of GPU telemetry to the Kubernetes workloads holding each device."""

from podmapper.kubernetes.annotator import MetricAnnotator
from podmapper.kubernetes.device_ids import (
    DeviceIDKind,
    DeviceIDResolver,
    ResolvedDeviceID,
    get_shared_gpu,
    gi_identifier,
    gpu_instance_identifier,
)
from podmapper.kubernetes.index import (
    DeviceToPod,
    DeviceToSharingPods,
    WorkloadIndexBuilder,
    is_nvidia_resource,
)
from podmapper.kubernetes.mig import (
    MIGHierarchyResolver,
    NvmlMIGHierarchyResolver,
    parse_legacy_mig_uuid,
)
from podmapper.kubernetes.pod_mapper import PodMapper
from podmapper.kubernetes.podresources import PodResourcesClient

__all__ = [
    "DeviceIDKind",
    "DeviceIDResolver",
    "DeviceToPod",
    "DeviceToSharingPods",
    "MIGHierarchyResolver",
    "MetricAnnotator",
    "NvmlMIGHierarchyResolver",
    "PodMapper",
    "PodResourcesClient",
    "ResolvedDeviceID",
    "WorkloadIndexBuilder",
    "get_shared_gpu",
    "gi_identifier",
    "gpu_instance_identifier",
    "is_nvidia_resource",
    "parse_legacy_mig_uuid",
]
