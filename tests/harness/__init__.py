# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from tests.harness.fake_pod_resources_server import (
    FakePodResourcesServer,
    make_snapshot,
    snapshot_to_proto,
)
from tests.harness.kubernetes_helpers import StubMIGResolver, make_sample

__all__ = [
    "FakePodResourcesServer",
    "StubMIGResolver",
    "make_sample",
    "make_snapshot",
    "snapshot_to_proto",
]
