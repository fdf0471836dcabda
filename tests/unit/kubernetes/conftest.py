# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures for testing the Kubernetes pod mapper.
"""

import pytest

from podmapper.common.models import GPUInfo, SystemInfo
from tests.harness.kubernetes_helpers import PARENT_GPU_UUID, StubMIGResolver


@pytest.fixture
def system_info() -> SystemInfo:
    """Single MIG-enabled GPU at index 0."""
    return SystemInfo(gpus=[GPUInfo(gpu=0, uuid=PARENT_GPU_UUID, mig_enabled=True)])


@pytest.fixture
def mig_resolver() -> StubMIGResolver:
    """Resolves every MIG UUID to GPU instance 3 of the GPU at index 0."""
    return StubMIGResolver()
