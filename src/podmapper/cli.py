# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Main CLI entry point for podmapper."""

################################################################################
# NOTE: Keep the imports here to a minimum. This file is read every time
# the CLI is run, including to generate the help text.
################################################################################

from cyclopts import App

from podmapper.cli_utils import exit_on_error
from podmapper.common.config import PodMapperConfig
from podmapper.common.enums import PodMapperLogLevel
from podmapper.common.environment import Environment

app = App(name="podmapper", help="Kubernetes pod attribution for DCGM GPU telemetry")


@app.command(name="resolve")
def resolve(
    device_ids: list[str],
    nvml: bool = False,
    log_level: PodMapperLogLevel = Environment.LOGGING.LEVEL,
) -> None:
    """Show the device index keys and shared GPU slice derived from device IDs.

    Without `--nvml`, MIG UUIDs are shown without their GPU instance key, which
    needs the node topology.

    Args:
        device_ids: Device IDs as reported by the kubelet (e.g. MIG-<uuid>, nvidia0/gi1/vgpu2).
        nvml: Read the GPU topology from NVML and resolve MIG UUIDs to GPU instances.
        log_level: Console log level.
    """
    with exit_on_error(title="Error Resolving Device IDs"):
        from rich.console import Console
        from rich.table import Table

        from podmapper.common.logging import setup_rich_logging
        from podmapper.common.models import SystemInfo
        from podmapper.kubernetes.device_ids import DeviceIDResolver
        from podmapper.kubernetes.mig import NvmlMIGHierarchyResolver

        setup_rich_logging(log_level)

        mig_resolver = NvmlMIGHierarchyResolver() if nvml else None
        try:
            system_info = (
                mig_resolver.read_system_info() if mig_resolver else SystemInfo()
            )
            resolver = DeviceIDResolver(system_info, mig_resolver)
            resolved_ids = [resolver.resolve(device_id) for device_id in device_ids]
        finally:
            if mig_resolver is not None:
                mig_resolver.shutdown()

        table = Table(title="Device ID resolution")
        table.add_column("Device ID", style="cyan")
        table.add_column("Kind")
        table.add_column("Keys")
        table.add_column("vGPU")
        for resolved in resolved_ids:
            table.add_row(
                resolved.device_id,
                str(resolved.kind),
                ", ".join(resolved.keys),
                resolved.vgpu if resolved.vgpu is not None else "-",
            )
        Console().print(table)


@app.command(name="show-index")
def show_index(
    config: PodMapperConfig | None = None,
    nvml: bool = False,
    log_level: PodMapperLogLevel = Environment.LOGGING.LEVEL,
) -> None:
    """Query the kubelet and print the device index built from its pod resources.

    Args:
        config: Pod mapper configuration.
        nvml: Read the GPU topology from NVML so MIG devices are also keyed by GPU instance.
        log_level: Console log level.
    """
    with exit_on_error(title="Error Building Device Index"):
        from rich.console import Console
        from rich.table import Table

        from podmapper.common.logging import setup_rich_logging
        from podmapper.common.models import SystemInfo
        from podmapper.kubernetes.index import WorkloadIndexBuilder
        from podmapper.kubernetes.mig import NvmlMIGHierarchyResolver
        from podmapper.kubernetes.podresources import PodResourcesClient

        setup_rich_logging(log_level)
        config = config or PodMapperConfig()

        with PodResourcesClient(
            config.pod_resources_kubelet_socket,
            api_version=config.pod_resources_api_version,
        ) as client:
            snapshot = client.list_pods()

        mig_resolver = NvmlMIGHierarchyResolver() if nvml else None
        try:
            system_info = (
                mig_resolver.read_system_info() if mig_resolver else SystemInfo()
            )
            index = WorkloadIndexBuilder(
                nvidia_resource_names=config.nvidia_resource_names,
                mig_resolver=mig_resolver,
            ).build_device_to_sharing_pods(snapshot, system_info)
        finally:
            if mig_resolver is not None:
                mig_resolver.shutdown()

        table = Table(title=f"Device index ({config.pod_resources_kubelet_socket})")
        table.add_column("Device key", style="cyan")
        table.add_column("Namespace")
        table.add_column("Pod")
        table.add_column("Container")
        table.add_column("vGPU")
        for key, records in index.items():
            # Without sharing only the last container for a key is used.
            shown = records if config.virtual_gpus else records[-1:]
            for record in shown:
                table.add_row(
                    key, record.namespace, record.name, record.container, record.vgpu
                )
        Console().print(table)
