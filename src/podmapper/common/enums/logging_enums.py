# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from podmapper.common.enums.base_enums import CaseInsensitiveStrEnum


class PodMapperLogLevel(CaseInsensitiveStrEnum):
    """Log levels accepted by the CLI and environment settings."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
