# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Integration tests for propladder.

Whole simulation runs checked against the engine's end-to-end guarantees.
"""
