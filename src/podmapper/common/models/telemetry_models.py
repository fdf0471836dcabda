# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Telemetry sample models consumed and annotated by the pod mapper."""

from pydantic import ConfigDict, Field

from podmapper.common.enums import KubernetesGPUIDType
from podmapper.common.exceptions import UnsupportedGPUIDTypeError
from podmapper.common.identifiers import gi_identifier
from podmapper.common.models.base_models import PodMapperBaseModel


class Counter(PodMapperBaseModel):
    """DCGM field definition a group of samples was collected for.

    Frozen so it can key a `MetricsByCounter` mapping.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    field_id: int = Field(..., description="DCGM field ID (e.g. 155)")
    field_name: str = Field(
        ..., description="DCGM field name (e.g. DCGM_FI_DEV_POWER_USAGE)"
    )
    prom_type: str = Field(default="gauge", description="Prometheus metric type")
    help: str = Field(default="", description="Help text for the exported metric")


class TelemetrySample(PodMapperBaseModel):
    """One reading of one counter on one GPU or MIG instance.

    Only `attributes` is modified by the pod mapper; every other field is
    owned by the collector that produced the sample.
    """

    counter: Counter = Field(..., description="Counter this sample belongs to")
    gpu: str = Field(..., description="GPU index as reported by DCGM")
    gpu_uuid: str = Field(default="", description="GPU or MIG device UUID")
    gpu_device: str = Field(default="", description="Device name, e.g. nvidia0")
    gpu_model_name: str = Field(default="", description="GPU model name")
    gpu_instance_id: str = Field(
        default="", description="MIG GPU instance ID, empty for whole GPUs"
    )
    value: str = Field(..., description="Sample value, formatted for exposition")
    mig_profile: str = Field(
        default="", description="MIG profile name, empty for whole GPUs"
    )
    hostname: str = Field(default="", description="Host the sample was taken on")
    labels: dict[str, str] = Field(
        default_factory=dict, description="Collector-provided labels"
    )
    attributes: dict[str, str] = Field(
        default_factory=dict,
        description="Annotation target; pod, namespace and container keys are written here",
    )

    def get_id_of_type(self, id_type: KubernetesGPUIDType) -> str:
        """Return the identity used to look this sample up in the device index.

        MIG samples are always identified by their GPU instance, whatever the
        configured convention, so that both MIG-UUID and GKE MIG device IDs match.

        Raises:
            UnsupportedGPUIDTypeError: If `id_type` is not a known convention.
        """
        if self.mig_profile:
            return gi_identifier(self.gpu, self.gpu_instance_id)

        if id_type == KubernetesGPUIDType.GPU_UUID:
            return self.gpu_uuid
        if id_type == KubernetesGPUIDType.DEVICE_NAME:
            return self.gpu_device
        raise UnsupportedGPUIDTypeError(
            f"unsupported KubernetesGPUIDType for MetricID '{id_type}'"
        )


MetricsByCounter = dict[Counter, list[TelemetrySample]]
