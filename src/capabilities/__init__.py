"""Capability Gating Engine.

Evaluates a coverage snapshot against a static capability registry,
aggregates the verdicts into per-feature coverage, and synthesizes
prioritized repair suggestions.

Deterministic -- pure functions over the snapshot, no I/O.
"""
