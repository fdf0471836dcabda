# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import sys

from podmapper.cli import app


def main() -> int:
    app(sys.argv[1:])
    return 0


if __name__ == "__main__":
    sys.exit(main())
