"""Parquet schema definitions for simulation artifacts.

All Arrow schemas used for persisting per-tick ball state, territory claims
and territory counts are centralised here so that the engine and the
visualization layer work against the same column contracts.
"""

from __future__ import annotations

import pyarrow as pa

RUN_PAYLOAD_SCHEMA_VERSION = 1

BALL_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("tick", pa.int64()),
        ("ball", pa.int64()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("dx", pa.int64()),
        ("dy", pa.int64()),
        ("x_collision", pa.bool_()),
        ("y_collision", pa.bool_()),
        ("corner_collision", pa.bool_()),
        ("perturbed", pa.bool_()),
        ("held", pa.bool_()),
    ]
)

CLAIM_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("tick", pa.int64()),
        ("ball", pa.int64()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("label", pa.int64()),
    ]
)

TERRITORY_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("tick", pa.int64()),
        ("count_a", pa.int64()),
        ("count_b", pa.int64()),
    ]
)
