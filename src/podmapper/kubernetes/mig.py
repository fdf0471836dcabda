# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Resolution of MIG device UUIDs to their parent GPU and GPU instance."""

from typing import Protocol, runtime_checkable

import pynvml

from podmapper.common.constants import MIG_UUID_PREFIX
from podmapper.common.exceptions import MIGResolutionError
from podmapper.common.mixins import LoggerMixin
from podmapper.common.models import GPUInfo, MIGDeviceInfo, SystemInfo

__all__ = [
    "MIGHierarchyResolver",
    "NvmlMIGHierarchyResolver",
    "parse_legacy_mig_uuid",
]


@runtime_checkable
class MIGHierarchyResolver(Protocol):
    """Resolves a MIG device UUID to its place in the GPU hierarchy.

    Implementations raise MIGResolutionError on failure. Callers treat a failure
    as "no GPU-instance key for this device" and carry on.
    """

    def resolve(self, mig_uuid: str) -> MIGDeviceInfo:
        """Return the parent GPU UUID, GPU instance ID and compute instance ID.

        Args:
            mig_uuid: The MIG device UUID including its `MIG-` prefix.
        """
        ...


def parse_legacy_mig_uuid(mig_uuid: str) -> MIGDeviceInfo:
    """Parse the `MIG-GPU-<uuid>/<gi>/<ci>` UUID form used by older drivers.

    Raises:
        MIGResolutionError: If the UUID is not in the legacy form.
    """
    prefix, sep, rest = mig_uuid.partition("-")
    if not sep or f"{prefix}-" != MIG_UUID_PREFIX:
        raise MIGResolutionError(f"unable to parse UUID as MIG device: {mig_uuid!r}")

    tokens = rest.split("/", 2)
    if len(tokens) != 3 or not tokens[0].startswith("GPU-"):
        raise MIGResolutionError(f"unable to parse UUID as MIG device: {mig_uuid!r}")

    try:
        gpu_instance_id = int(tokens[1])
        compute_instance_id = int(tokens[2])
    except ValueError as e:
        raise MIGResolutionError(
            f"unable to parse UUID as MIG device: {mig_uuid!r}"
        ) from e

    return MIGDeviceInfo(
        parent_uuid=tokens[0],
        gpu_instance_id=gpu_instance_id,
        compute_instance_id=compute_instance_id,
    )


def _as_str(value: str | bytes) -> str:
    # Older pynvml releases return bytes for string queries.
    return value.decode() if isinstance(value, bytes) else value


class NvmlMIGHierarchyResolver(LoggerMixin):
    """MIGHierarchyResolver backed by NVML through pynvml.

    NVML is initialized on first use. If the driver does not know the UUID
    (older drivers report MIG devices as `MIG-GPU-<uuid>/<gi>/<ci>`), the UUID
    is parsed instead.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._initialized = False

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        try:
            pynvml.nvmlInit()
        except pynvml.NVMLError as e:
            raise MIGResolutionError(f"failed to initialize NVML: {e}") from e
        self._initialized = True
        self.debug("NVML initialized")

    def shutdown(self) -> None:
        if not self._initialized:
            return
        try:
            pynvml.nvmlShutdown()
        except pynvml.NVMLError as e:
            self.warning(f"Failed to shut down NVML: {e}")
        finally:
            self._initialized = False

    def __enter__(self) -> "NvmlMIGHierarchyResolver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    def resolve(self, mig_uuid: str) -> MIGDeviceInfo:
        self._ensure_initialized()

        try:
            handle = pynvml.nvmlDeviceGetHandleByUUID(mig_uuid)
        except pynvml.NVMLError:
            self.trace(lambda: f"NVML does not know {mig_uuid}, trying legacy format")
            return parse_legacy_mig_uuid(mig_uuid)

        try:
            parent_handle = pynvml.nvmlDeviceGetDeviceHandleFromMigDeviceHandle(handle)
            parent_uuid = _as_str(pynvml.nvmlDeviceGetUUID(parent_handle))
            gpu_instance_id = pynvml.nvmlDeviceGetGpuInstanceId(handle)
            compute_instance_id = pynvml.nvmlDeviceGetComputeInstanceId(handle)
        except pynvml.NVMLError as e:
            raise MIGResolutionError(
                f"failed to query MIG device {mig_uuid!r}: {e}"
            ) from e

        return MIGDeviceInfo(
            parent_uuid=parent_uuid,
            gpu_instance_id=gpu_instance_id,
            compute_instance_id=compute_instance_id,
        )

    def read_system_info(self) -> SystemInfo:
        """Enumerate the GPUs visible to NVML into a SystemInfo topology.

        Raises:
            MIGResolutionError: If NVML cannot be initialized or queried.
        """
        self._ensure_initialized()

        gpus = []
        try:
            for index in range(pynvml.nvmlDeviceGetCount()):
                handle = pynvml.nvmlDeviceGetHandleByIndex(index)
                try:
                    current_mode, _ = pynvml.nvmlDeviceGetMigMode(handle)
                    mig_enabled = current_mode == pynvml.NVML_DEVICE_MIG_ENABLE
                except pynvml.NVMLError:
                    # Not supported on GPUs without MIG
                    mig_enabled = False
                gpus.append(
                    GPUInfo(
                        gpu=index,
                        uuid=_as_str(pynvml.nvmlDeviceGetUUID(handle)),
                        device_name=f"nvidia{pynvml.nvmlDeviceGetMinorNumber(handle)}",
                        mig_enabled=mig_enabled,
                    )
                )
        except pynvml.NVMLError as e:
            raise MIGResolutionError(f"failed to enumerate GPUs: {e}") from e

        return SystemInfo(gpus=gpus)
