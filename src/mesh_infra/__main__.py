# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Allow ``python -m mesh_infra``."""

from mesh_infra.cli import main

if __name__ == "__main__":
    main()
