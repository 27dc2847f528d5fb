"""Path construction helpers for simulation output directories."""

from __future__ import annotations

from pathlib import Path


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Resolve *path* and ensure it stays within the trusted *base_dir*.

    Raises :exc:`ValueError` if the resolved path escapes the base directory.
    """
    candidate = path if path.is_absolute() else base_dir / path
    resolved = candidate.resolve()
    base_resolved = base_dir.resolve()
    if resolved != base_resolved and base_resolved not in resolved.parents:
        raise ValueError(f"Path escapes base_dir: {path}")
    return resolved


def runs_dir(out_dir: Path) -> Path:
    """Return path to the run-metadata subdirectory within an output directory."""
    return out_dir / "runs"


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def run_logs_dir(out_dir: Path, run_id: str) -> Path:
    """Return the per-run log directory, so runs sharing *out_dir* never collide."""
    return logs_dir(out_dir) / run_id


def run_metadata_path(out_dir: Path, run_id: str) -> Path:
    return runs_dir(out_dir) / f"{run_id}.json"


def ball_log_path(out_dir: Path, run_id: str) -> Path:
    """Return path to the per-tick ball state Parquet file of one run."""
    return run_logs_dir(out_dir, run_id) / "ball_log.parquet"


def claim_log_path(out_dir: Path, run_id: str) -> Path:
    """Return path to the claimed-cell Parquet file of one run."""
    return run_logs_dir(out_dir, run_id) / "claim_log.parquet"


def territory_log_path(out_dir: Path, run_id: str) -> Path:
    """Return path to the per-tick territory count Parquet file of one run."""
    return run_logs_dir(out_dir, run_id) / "territory_log.parquet"
