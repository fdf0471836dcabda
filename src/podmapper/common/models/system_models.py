# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pydantic import Field

from podmapper.common.models.base_models import PodMapperBaseModel


class GPUInfo(PodMapperBaseModel):
    """A physical GPU on this node."""

    gpu: int = Field(..., ge=0, description="GPU index")
    uuid: str = Field(..., description="GPU UUID")
    device_name: str = Field(default="", description="Device name, e.g. nvidia0")
    mig_enabled: bool = Field(default=False, description="Whether MIG mode is on")


class SystemInfo(PodMapperBaseModel):
    """GPU topology of the node for one collection cycle."""

    gpus: list[GPUInfo] = Field(default_factory=list)

    @property
    def gpu_count(self) -> int:
        return len(self.gpus)

    def find_gpu_by_uuid(self, uuid: str) -> GPUInfo | None:
        for gpu in self.gpus:
            if gpu.uuid == uuid:
                return gpu
        return None


class MIGDeviceInfo(PodMapperBaseModel):
    """Where a MIG device sits inside its parent GPU."""

    parent_uuid: str = Field(..., description="UUID of the parent GPU")
    gpu_instance_id: int = Field(..., ge=0)
    compute_instance_id: int = Field(..., ge=0)
