# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from podmapper.common.enums.base_enums import CaseInsensitiveStrEnum
from podmapper.common.enums.kubernetes_enums import (
    KubernetesGPUIDType,
    PodResourcesAPIVersion,
)
from podmapper.common.enums.logging_enums import PodMapperLogLevel

__all__ = [
    "CaseInsensitiveStrEnum",
    "KubernetesGPUIDType",
    "PodMapperLogLevel",
    "PodResourcesAPIVersion",
]
