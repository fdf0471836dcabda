# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Parsing of device IDs reported by the kubelet into device index keys.

Device plugins encode GPUs differently depending on the plugin and on the
sharing mode in use:

- NVIDIA plugin, whole GPU:      ``GPU-<uuid>``
- NVIDIA plugin, MIG:            ``MIG-<uuid>``
- NVIDIA plugin, shared:         ``GPU-<uuid>::<slice>`` / ``MIG-<uuid>::<slice>``
- GKE plugin, whole GPU:         ``nvidia<N>``
- GKE plugin, MIG:               ``nvidia<N>/gi<M>`` (optionally ``/vgpu<slice>``)
- GKE plugin, shared:            ``nvidia<N>/vgpu<slice>``

A device ID is classified by the first matcher that accepts it. The matcher
yields the keys derived from it, and the raw device ID is always added as a
final key so that a sample built under another convention can still match.
"""

from dataclasses import dataclass, field
from typing import Protocol

from podmapper.common.constants import (
    GKE_MIG_DEVICE_ID_REGEX,
    GKE_VIRTUAL_GPU_DEVICE_ID_SEPARATOR,
    MIG_UUID_PREFIX,
    NVIDIA_SHARED_DEVICE_ID_SEPARATOR,
)
from podmapper.common.enums import CaseInsensitiveStrEnum
from podmapper.common.exceptions import MIGResolutionError
from podmapper.common.identifiers import gi_identifier
from podmapper.common.logger import PodMapperLogger
from podmapper.common.models import SystemInfo
from podmapper.kubernetes.mig import MIGHierarchyResolver

__all__ = [
    "DeviceIDKind",
    "DeviceIDMatcher",
    "DeviceIDResolver",
    "GKEMIGMatcher",
    "MIGUUIDMatcher",
    "ResolvedDeviceID",
    "SharedSuffixMatcher",
    "get_shared_gpu",
    "gi_identifier",
    "gpu_instance_identifier",
]

_logger = PodMapperLogger(__name__)


class DeviceIDKind(CaseInsensitiveStrEnum):
    """How a device ID was classified."""

    MIG_UUID = "mig_uuid"
    GKE_MIG = "gke_mig"
    NVIDIA_SHARED = "nvidia_shared"
    GKE_SHARED = "gke_shared"
    FALLBACK = "fallback"


@dataclass(frozen=True, slots=True)
class ResolvedDeviceID:
    """Keys derived from a single device ID.

    Attributes:
        device_id: The raw device ID as reported by the kubelet.
        kind: Which matcher classified the device ID.
        keys: Index keys, derived keys first and the raw device ID last, without duplicates.
        vgpu: Shared GPU slice index, or None when the device is not shared.
    """

    device_id: str
    kind: DeviceIDKind
    keys: tuple[str, ...] = field(default_factory=tuple)
    vgpu: str | None = None


def get_shared_gpu(device_id: str) -> tuple[str, bool]:
    """Extract the shared GPU slice index from a device ID.

    The GKE `/vgpu` separator is checked first, then the NVIDIA `::` separator.

    Returns:
        (slice index, True) if the device ID carries one, ("", False) otherwise.
    """
    # Check if we're using the GKE device plugin or NVIDIA device plugin.
    if GKE_VIRTUAL_GPU_DEVICE_ID_SEPARATOR in device_id:
        return device_id.split(GKE_VIRTUAL_GPU_DEVICE_ID_SEPARATOR)[1], True
    if NVIDIA_SHARED_DEVICE_ID_SEPARATOR in device_id:
        return device_id.split(NVIDIA_SHARED_DEVICE_ID_SEPARATOR)[1], True
    return "", False


def gpu_instance_identifier(
    system_info: SystemInfo, parent_uuid: str, gpu_instance_id: int
) -> str | None:
    """Build the GI identifier for a GPU instance of the GPU with `parent_uuid`.

    Returns None if the parent GPU is not part of the topology.
    """
    gpu = system_info.find_gpu_by_uuid(parent_uuid)
    if gpu is None:
        return None
    return gi_identifier(gpu.gpu, gpu_instance_id)


class DeviceIDMatcher(Protocol):
    """One device ID convention.

    `match` returns None if the device ID does not follow the convention,
    otherwise the keys derived from it (possibly none).
    """

    kind: DeviceIDKind

    def match(self, device_id: str) -> list[str] | None: ...


class MIGUUIDMatcher:
    """``MIG-<uuid>``: the bare UUID, plus the GI identifier when the hierarchy resolves."""

    kind = DeviceIDKind.MIG_UUID

    def __init__(
        self, system_info: SystemInfo, mig_resolver: MIGHierarchyResolver | None
    ) -> None:
        self.system_info = system_info
        self.mig_resolver = mig_resolver

    def match(self, device_id: str) -> list[str] | None:
        if not device_id.startswith(MIG_UUID_PREFIX):
            return None

        keys = []
        gi_key = self._resolve_gi_identifier(device_id)
        if gi_key is not None:
            keys.append(gi_key)
        keys.append(device_id[len(MIG_UUID_PREFIX) :])
        return keys

    def _resolve_gi_identifier(self, device_id: str) -> str | None:
        if self.mig_resolver is None:
            return None
        try:
            mig_device = self.mig_resolver.resolve(device_id)
        except MIGResolutionError as e:
            _logger.debug(lambda: f"Skipping GPU instance key for {device_id}: {e}")
            return None

        gi_key = gpu_instance_identifier(
            self.system_info, mig_device.parent_uuid, mig_device.gpu_instance_id
        )
        if gi_key is None:
            _logger.debug(
                lambda: f"Parent GPU {mig_device.parent_uuid} of {device_id} is not in the topology"
            )
        return gi_key


class GKEMIGMatcher:
    """``nvidia<N>/gi<M>[/vgpu<K>]``: the GI identifier ``N-M``."""

    kind = DeviceIDKind.GKE_MIG

    def match(self, device_id: str) -> list[str] | None:
        matches = GKE_MIG_DEVICE_ID_REGEX.match(device_id)
        if matches is None:
            return None
        gpu_index, gpu_instance_id = matches.group(1), matches.group(2)
        return [gi_identifier(gpu_index, gpu_instance_id)]


class SharedSuffixMatcher:
    """``<base><separator><slice>``: the base device ID left of the separator."""

    def __init__(self, kind: DeviceIDKind, separator: str) -> None:
        self.kind = kind
        self.separator = separator

    def match(self, device_id: str) -> list[str] | None:
        if self.separator not in device_id:
            return None
        return [device_id.split(self.separator)[0]]


class DeviceIDResolver:
    """Classifies device IDs and derives their device index keys.

    Matchers are tried in order: MIG UUID, GKE MIG, NVIDIA `::` sharing,
    GKE `/vgpu` sharing. The first one that accepts a device ID classifies it;
    a device ID no matcher accepts is only keyed by itself.

    Args:
        system_info: GPU topology, used to turn a MIG parent UUID into a GPU index.
        mig_resolver: Resolves MIG UUIDs to their GPU instance. Without one,
            MIG UUIDs are only keyed by their bare UUID.
    """

    def __init__(
        self,
        system_info: SystemInfo,
        mig_resolver: MIGHierarchyResolver | None = None,
    ) -> None:
        self.matchers: list[DeviceIDMatcher] = [
            MIGUUIDMatcher(system_info, mig_resolver),
            GKEMIGMatcher(),
            SharedSuffixMatcher(
                DeviceIDKind.NVIDIA_SHARED, NVIDIA_SHARED_DEVICE_ID_SEPARATOR
            ),
            SharedSuffixMatcher(
                DeviceIDKind.GKE_SHARED, GKE_VIRTUAL_GPU_DEVICE_ID_SEPARATOR
            ),
        ]

    def resolve(self, device_id: str) -> ResolvedDeviceID:
        kind = DeviceIDKind.FALLBACK
        derived_keys: list[str] = []
        for matcher in self.matchers:
            matched_keys = matcher.match(device_id)
            if matched_keys is not None:
                kind = matcher.kind
                derived_keys = matched_keys
                break

        # Default mapping between the device ID and the pod, whatever matched.
        keys = tuple(dict.fromkeys([*derived_keys, device_id]))
        vgpu, shared = get_shared_gpu(device_id)

        resolved = ResolvedDeviceID(
            device_id=device_id,
            kind=kind,
            keys=keys,
            vgpu=vgpu if shared else None,
        )
        _logger.trace(lambda: f"Resolved device ID: {resolved}")
        return resolved
