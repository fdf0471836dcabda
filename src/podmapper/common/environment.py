# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Environment-driven settings, grouped by concern.

Every field can be overridden through an environment variable named
`<env_prefix><FIELD>`, e.g. `PODMAPPER_KUBERNETES_CONNECTION_TIMEOUT=5`.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from podmapper.common.enums import PodMapperLogLevel


class _KubernetesSettings(BaseSettings):
    """Settings for the kubelet pod-resources integration."""

    model_config = SettingsConfigDict(
        env_prefix="PODMAPPER_KUBERNETES_", case_sensitive=False
    )

    CONNECTION_TIMEOUT: float = Field(
        default=10.0,
        gt=0.0,
        description="Timeout in seconds for dialing the pod-resources socket and for the List call",
    )
    POD_RESOURCES_SOCKET: Path = Field(
        default=Path("/var/lib/kubelet/pod-resources/kubelet.sock"),
        description="Default path of the kubelet pod-resources unix socket",
    )


class _LoggingSettings(BaseSettings):
    """Settings for console logging."""

    model_config = SettingsConfigDict(
        env_prefix="PODMAPPER_LOGGING_", case_sensitive=False
    )

    LEVEL: PodMapperLogLevel = Field(
        default=PodMapperLogLevel.INFO,
        description="Default log level used by the CLI",
    )
    MAX_CONSOLE_MESSAGE_LENGTH: int = Field(
        default=4096,
        ge=64,
        description="Messages longer than this are truncated on the console",
    )


class _Environment(BaseSettings):
    """Root settings object. Access groups via `Environment.KUBERNETES.*`."""

    model_config = SettingsConfigDict(env_prefix="PODMAPPER_", case_sensitive=False)

    KUBERNETES: _KubernetesSettings = Field(default_factory=_KubernetesSettings)
    LOGGING: _LoggingSettings = Field(default_factory=_LoggingSettings)


Environment = _Environment()
