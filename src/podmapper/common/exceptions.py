# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0


class PodMapperError(Exception):
    """Base class for all exceptions raised by podmapper."""

    def raw_str(self) -> str:
        """Return the raw string representation of the exception."""
        return super().__str__()

    def __str__(self) -> str:
        """Return the string representation of the exception with the class name."""
        return f"{self.__class__.__name__}: {super().__str__()}"


class PodResourcesError(PodMapperError):
    """Base class for failures talking to the kubelet pod-resources service."""


class PodResourcesConnectionError(PodResourcesError):
    """The pod-resources socket could not be reached within the connection timeout."""

    def __init__(self, socket_path: str, reason: str) -> None:
        super().__init__(f"failure connecting to '{socket_path}'; err: {reason}")
        self.socket_path = socket_path


class PodResourcesListError(PodResourcesError):
    """The pod-resources List call failed or exceeded its deadline."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"failure getting pod resources; err: {reason}")


class MIGResolutionError(PodMapperError):
    """A MIG device UUID could not be resolved to its parent GPU and instance."""


class UnsupportedGPUIDTypeError(PodMapperError):
    """A telemetry sample was asked for an identity under an unknown convention."""
