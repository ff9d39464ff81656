"""Validation helpers for search settings and point-set input."""

from __future__ import annotations

from typing import Dict, List, Sequence

from models import Point, SearchConfig, TestCase


_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def apply_meta_to_config(meta: Dict[str, str], cfg: SearchConfig) -> SearchConfig:
    """Apply ``key=value`` overrides (CSV meta section or CLI) to a :class:`SearchConfig`."""

    lowered = {k.lower(): v for k, v in meta.items()}

    if "near_offsets" in lowered:
        cfg.near_offsets = int(float(lowered["near_offsets"]))

    if "antipodal_band" in lowered:
        cfg.antipodal_band = int(float(lowered["antipodal_band"]))

    if "random_offsets" in lowered:
        cfg.random_offsets = int(float(lowered["random_offsets"]))

    if "hull_samples" in lowered:
        cfg.hull_samples = max(1, int(float(lowered["hull_samples"])))

    seed = lowered.get("seed")
    if seed is not None:
        seed = seed.strip()
        cfg.seed = int(seed) if seed and seed.lower() != "none" else None

    fallback = lowered.get("use_fallback")
    if fallback is not None:
        fallback_l = fallback.strip().lower()
        if fallback_l in _TRUTHY:
            cfg.use_fallback = True
        elif fallback_l in _FALSY:
            cfg.use_fallback = False

    if "coordinate_limit" in lowered:
        cfg.coordinate_limit = int(float(lowered["coordinate_limit"]))

    return cfg


def _append_error(errors: List[str], message: str) -> None:
    if message:
        errors.append(message)


def _check_point_set(name: str, points: Sequence[Point], limit: int, errors: List[str]) -> None:
    for index, pt in enumerate(points, start=1):
        if pt.id != index:
            _append_error(errors, f"Point set {name}: expected id {index}, got {pt.id}.")
        if abs(pt.x) > limit or abs(pt.y) > limit:
            _append_error(
                errors,
                f"Point set {name} id {pt.id}: coordinates ({pt.x}, {pt.y}) exceed limit {limit}.",
            )


def validate_case(case: TestCase, cfg: SearchConfig) -> TestCase:
    """Validate ids and the coordinate bound for one test case.

    Raises
    ------
    ValueError
        If any validation rule fails. The error message aggregates all
        detected issues for easier correction by callers.
    """

    errors: List[str] = []

    if cfg.coordinate_limit <= 0:
        _append_error(errors, "coordinate_limit must be positive.")
    if cfg.near_offsets < 0 or cfg.antipodal_band < 0 or cfg.random_offsets < 0:
        _append_error(errors, "Offset counts must be non-negative.")

    _check_point_set("P", case.p, cfg.coordinate_limit, errors)
    _check_point_set("R", case.r, cfg.coordinate_limit, errors)

    if errors:
        prefix = f"{case.label}: " if case.label else ""
        raise ValueError("\n".join(prefix + message for message in errors))

    return case


__all__ = ["apply_meta_to_config", "validate_case"]
