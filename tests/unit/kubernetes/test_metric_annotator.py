# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest

from podmapper.common.config import PodMapperConfig
from podmapper.common.enums import KubernetesGPUIDType
from podmapper.common.exceptions import UnsupportedGPUIDTypeError
from podmapper.common.models import Counter, WorkloadRecord
from podmapper.kubernetes.annotator import MetricAnnotator
from podmapper.kubernetes.index import WorkloadIndexBuilder
from tests.harness.fake_pod_resources_server import make_snapshot
from tests.harness.kubernetes_helpers import GPU_UUID, POWER_USAGE, make_sample

TRAINER = WorkloadRecord(name="trainer", namespace="ml", container="worker")


class TestMetricAnnotatorWithoutSharing:
    """Test in-place annotation when GPU sharing is disabled."""

    def test_matched_sample_gets_workload_attributes(self):
        sample = make_sample(gpu_uuid=GPU_UUID)
        metrics = {POWER_USAGE: [sample]}

        MetricAnnotator(PodMapperConfig()).annotate(metrics, {GPU_UUID: TRAINER})

        assert metrics[POWER_USAGE] == [sample]
        assert sample.attributes == {
            "pod": "trainer",
            "namespace": "ml",
            "container": "worker",
        }

    def test_unmatched_sample_is_left_alone(self):
        sample = make_sample(gpu_uuid="GPU-other")
        metrics = {POWER_USAGE: [sample]}

        MetricAnnotator(PodMapperConfig()).annotate(metrics, {GPU_UUID: TRAINER})

        assert metrics[POWER_USAGE] == [sample]
        assert sample.attributes == {}

    def test_old_namespace_keys(self):
        sample = make_sample(gpu_uuid=GPU_UUID)

        MetricAnnotator(PodMapperConfig(use_old_namespace=True)).annotate(
            {POWER_USAGE: [sample]}, {GPU_UUID: TRAINER}
        )

        assert sample.attributes == {
            "pod_name": "trainer",
            "pod_namespace": "ml",
            "container_name": "worker",
        }

    def test_device_name_identity(self):
        sample = make_sample(gpu_uuid=GPU_UUID, gpu_device="nvidia0")
        config = PodMapperConfig(gpu_id_type=KubernetesGPUIDType.DEVICE_NAME)

        MetricAnnotator(config).annotate(
            {POWER_USAGE: [sample]}, {GPU_UUID: TRAINER, "nvidia0": TRAINER}
        )

        assert sample.attributes["pod"] == "trainer"

    def test_mig_sample_matches_by_gpu_instance(self):
        sample = make_sample(
            gpu_uuid=GPU_UUID, gpu="1", gpu_instance_id=2, mig_profile="1g.10gb"
        )

        index = {
            GPU_UUID: WorkloadRecord(name="wrong", namespace="ml", container="worker"),
            "1-2": TRAINER,
        }

        MetricAnnotator(PodMapperConfig()).annotate({POWER_USAGE: [sample]}, index)

        assert sample.attributes["pod"] == "trainer"

    def test_non_sharing_never_writes_vgpu(self):
        sample = make_sample(gpu_uuid=GPU_UUID)
        record = WorkloadRecord(
            name="trainer", namespace="ml", container="worker", vgpu="3"
        )

        MetricAnnotator(PodMapperConfig()).annotate(
            {POWER_USAGE: [sample]}, {GPU_UUID: record}
        )

        assert "vgpu" not in sample.attributes

    def test_unsupported_gpu_id_type_raises(self):
        annotator = MetricAnnotator(PodMapperConfig())
        annotator.config.gpu_id_type = "serial"

        with pytest.raises(UnsupportedGPUIDTypeError):
            annotator.annotate(
                {POWER_USAGE: [make_sample(gpu_uuid=GPU_UUID)]}, {GPU_UUID: TRAINER}
            )


class TestMetricAnnotatorWithSharing:
    """Test sample fan-out when GPU sharing is enabled."""

    @pytest.fixture
    def annotator(self) -> MetricAnnotator:
        return MetricAnnotator(PodMapperConfig(virtual_gpus=True))

    def test_one_copy_per_sharing_container(self, annotator):
        sample = make_sample(gpu_uuid=GPU_UUID)
        index = {
            GPU_UUID: [
                WorkloadRecord(name="a", namespace="ns", container="c", vgpu="2"),
                WorkloadRecord(name="b", namespace="ns", container="c", vgpu="3"),
            ]
        }

        expanded = annotator.expand_shared_samples([sample], index)

        assert [s.attributes for s in expanded] == [
            {"pod": "a", "namespace": "ns", "container": "c", "vgpu": "2"},
            {"pod": "b", "namespace": "ns", "container": "c", "vgpu": "3"},
        ]
        assert sample.attributes == {}
        assert all(s.value == sample.value for s in expanded)

    def test_unmatched_samples_are_dropped(self, annotator):
        matched = make_sample(gpu_uuid=GPU_UUID)
        unmatched = make_sample(gpu_uuid="GPU-idle")
        metrics = {POWER_USAGE: [unmatched, matched]}

        annotator.annotate(metrics, {GPU_UUID: [TRAINER]})

        assert len(metrics[POWER_USAGE]) == 1
        assert metrics[POWER_USAGE][0].gpu_uuid == GPU_UUID

    def test_empty_vgpu_is_not_written(self, annotator):
        expanded = annotator.expand_shared_samples(
            [make_sample(gpu_uuid=GPU_UUID)], {GPU_UUID: [TRAINER]}
        )

        assert "vgpu" not in expanded[0].attributes

    def test_copies_do_not_share_attributes(self, annotator):
        sample = make_sample(gpu_uuid=GPU_UUID)
        sample.attributes["hostname"] = "node-1"
        index = {
            GPU_UUID: [
                WorkloadRecord(name="a", namespace="ns", container="c"),
                WorkloadRecord(name="b", namespace="ns", container="c"),
            ]
        }

        first, second = annotator.expand_shared_samples([sample], index)

        assert first.attributes is not second.attributes
        assert first.attributes["pod"] == "a"
        assert second.attributes["pod"] == "b"
        assert sample.attributes == {"hostname": "node-1"}

    def test_every_counter_is_expanded(self, annotator):
        temperature = Counter(field_id=150, field_name="DCGM_FI_DEV_GPU_TEMP")
        metrics = {
            POWER_USAGE: [make_sample(gpu_uuid=GPU_UUID)],
            temperature: [make_sample(gpu_uuid=GPU_UUID, counter=temperature)],
        }
        index = {GPU_UUID: [TRAINER, TRAINER]}

        annotator.annotate(metrics, index)

        assert len(metrics[POWER_USAGE]) == 2
        assert len(metrics[temperature]) == 2


class TestAnnotationFromDeviceIDs:
    """Annotation driven by indexes built from realistic device-plugin IDs."""

    @pytest.mark.parametrize(
        "device_ids,gpu_id_type,sample_kwargs,expected_pods,expected_vgpus",
        [
            pytest.param(
                [f"{GPU_UUID}::2", f"{GPU_UUID}::3"],
                KubernetesGPUIDType.GPU_UUID,
                {"gpu_uuid": GPU_UUID},
                ["gpu-pod-0", "gpu-pod-1"],
                ["2", "3"],
                id="nvidia-shared-uuid",
            ),
            pytest.param(
                ["nvidia0/vgpu0", "nvidia0/vgpu1"],
                KubernetesGPUIDType.DEVICE_NAME,
                {"gpu_device": "nvidia0"},
                ["gpu-pod-0", "gpu-pod-1"],
                ["0", "1"],
                id="gke-shared-device-name",
            ),
            pytest.param(
                ["nvidia0/gi3/vgpu0", "nvidia0/gi3/vgpu1"],
                KubernetesGPUIDType.DEVICE_NAME,
                {"gpu": "0", "gpu_instance_id": 3, "mig_profile": "1g.10gb"},
                ["gpu-pod-0", "gpu-pod-1"],
                ["0", "1"],
                id="gke-mig-shared",
            ),
            pytest.param(
                ["0/vgpu"],
                KubernetesGPUIDType.DEVICE_NAME,
                {"gpu_device": "0"},
                ["gpu-pod-0"],
                [None],
                id="empty-slice-index",
            ),
            pytest.param(
                [GPU_UUID],
                KubernetesGPUIDType.GPU_UUID,
                {"gpu_uuid": GPU_UUID},
                ["gpu-pod-0"],
                [None],
                id="not-shared",
            ),
        ],
    )  # fmt: skip
    def test_sharing_annotation(
        self,
        system_info,
        device_ids,
        gpu_id_type,
        sample_kwargs,
        expected_pods,
        expected_vgpus,
    ):
        config = PodMapperConfig(virtual_gpus=True, gpu_id_type=gpu_id_type)
        index = WorkloadIndexBuilder().build(
            make_snapshot("nvidia.com/gpu", device_ids), system_info, True
        )
        metrics = {POWER_USAGE: [make_sample(**sample_kwargs)]}

        MetricAnnotator(config).annotate(metrics, index)

        samples = metrics[POWER_USAGE]
        assert [s.attributes["pod"] for s in samples] == expected_pods
        assert [s.attributes.get("vgpu") for s in samples] == expected_vgpus
        assert all(s.attributes["namespace"] == "default" for s in samples)
