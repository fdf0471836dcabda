# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from podmapper.common.config import PodMapperConfig
from podmapper.common.constants import (
    CONTAINER_ATTRIBUTE,
    NAMESPACE_ATTRIBUTE,
    OLD_CONTAINER_ATTRIBUTE,
    OLD_NAMESPACE_ATTRIBUTE,
    OLD_POD_ATTRIBUTE,
    POD_ATTRIBUTE,
    VGPU_ATTRIBUTE,
)
from podmapper.common.mixins import LoggerMixin
from podmapper.common.models import MetricsByCounter, TelemetrySample, WorkloadRecord
from podmapper.kubernetes.index import DeviceToPod, DeviceToSharingPods

__all__ = ["MetricAnnotator"]


class MetricAnnotator(LoggerMixin):
    """Writes pod, namespace and container attributes onto telemetry samples.

    Without GPU sharing, each sample whose identity is in the index is annotated
    in place and unmatched samples are left alone. With GPU sharing, each sample
    is replaced by one copy per container using its device, and samples for
    devices without a container are dropped.
    """

    def __init__(self, config: PodMapperConfig, **kwargs) -> None:
        super().__init__(**kwargs)
        self.config = config

    def annotate(
        self, metrics: MetricsByCounter, index: DeviceToPod | DeviceToSharingPods
    ) -> None:
        """Annotate every counter's samples. `metrics` is modified in place."""
        if self.config.virtual_gpus:
            for counter in metrics:
                metrics[counter] = self.expand_shared_samples(metrics[counter], index)
            return

        for samples in metrics.values():
            self.annotate_samples(samples, index)

    def annotate_samples(
        self, samples: list[TelemetrySample], device_to_pod: DeviceToPod
    ) -> None:
        for sample in samples:
            device_id = sample.get_id_of_type(self.config.gpu_id_type)
            record = device_to_pod.get(device_id)
            if record is not None:
                self._set_workload_attributes(sample, record)

    def expand_shared_samples(
        self, samples: list[TelemetrySample], device_to_pods: DeviceToSharingPods
    ) -> list[TelemetrySample]:
        """Return one annotated copy of each sample per container sharing its device.

        The input samples are not modified. This increases the number of unique
        label sets by the number of containers sharing each GPU.
        """
        expanded: list[TelemetrySample] = []
        for sample in samples:
            device_id = sample.get_id_of_type(self.config.gpu_id_type)
            for record in device_to_pods.get(device_id, []):
                shared_sample = sample.model_copy(deep=True)
                self._set_workload_attributes(shared_sample, record)
                if record.vgpu:
                    shared_sample.attributes[VGPU_ATTRIBUTE] = record.vgpu
                expanded.append(shared_sample)
        return expanded

    def _set_workload_attributes(
        self, sample: TelemetrySample, record: WorkloadRecord
    ) -> None:
        if self.config.use_old_namespace:
            sample.attributes[OLD_POD_ATTRIBUTE] = record.name
            sample.attributes[OLD_NAMESPACE_ATTRIBUTE] = record.namespace
            sample.attributes[OLD_CONTAINER_ATTRIBUTE] = record.container
        else:
            sample.attributes[POD_ATTRIBUTE] = record.name
            sample.attributes[NAMESPACE_ATTRIBUTE] = record.namespace
            sample.attributes[CONTAINER_ATTRIBUTE] = record.container
