# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0


def gi_identifier(gpu_index: int | str, gpu_instance_id: int | str) -> str:
    """Build the `<gpu index>-<gpu instance id>` key that names a MIG GPU instance.

    Both the MIG-UUID device-ID convention and the GKE `nvidiaN/giM` convention
    reduce to this key, as does a MIG telemetry sample.
    """
    return f"{gpu_index}-{gpu_instance_id}"
