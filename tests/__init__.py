# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
propladder test suite.

Unit tests for each subpackage live under `unit/`; end-to-end properties of
full simulation runs live under `integration/`.
"""
