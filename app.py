"""Streamlit UI for inspecting survey point sets and their boundary crossing."""
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd
import streamlit as st

from analysis import crossing_is_valid, hull_summary
from geometry import convex_hull
from io_cases import CaseFormatError, format_result, parse_cases
from io_unified_csv import CsvFormatError, load_unified_csv
from models import CrossingResult, Point, SearchConfig, TestCase, point_by_id
from runner import solve_case
from validation import apply_meta_to_config


def _load_unified_from_bytes(data: bytes):
    """Persist an uploaded CSV then load it via :func:`load_unified_csv`."""

    tmp_path: str | None = None
    try:
        with tempfile.NamedTemporaryFile("wb", delete=False, suffix=".csv") as handle:
            handle.write(data)
            tmp_path = handle.name
        return load_unified_csv(tmp_path)
    finally:
        if tmp_path:
            Path(tmp_path).unlink(missing_ok=True)


def _load_upload(name: str, data: bytes) -> Tuple[List[TestCase], SearchConfig, Optional[str]]:
    """Parse an uploaded file into cases and the config its meta section selects.

    Returns an error message instead of raising when the upload is unusable.
    """

    cfg = SearchConfig()
    try:
        if name.lower().endswith(".csv"):
            meta, case = _load_unified_from_bytes(data)
            cfg = apply_meta_to_config(meta, cfg)
            return [case], cfg, None
        return parse_cases(data.decode("utf-8")), cfg, None
    except (CaseFormatError, CsvFormatError, UnicodeDecodeError, ValueError) as exc:
        return [], cfg, f"Failed to load input: {exc}"


def _points_frame(name: str, points: List[Point]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"set": name, "id": pt.id, "x": pt.x, "y": pt.y} for pt in points],
        columns=["set", "id", "x", "y"],
    )


def _hull_frame(name: str, points: List[Point]) -> pd.DataFrame:
    hull = convex_hull(points)
    closed = hull + hull[:1] if len(hull) > 2 else hull
    return pd.DataFrame(
        [
            {"set": f"hull {name}", "order": i, "id": pt.id, "x": pt.x, "y": pt.y}
            for i, pt in enumerate(closed)
        ],
        columns=["set", "order", "id", "x", "y"],
    )


def _crossing_frame(case: TestCase, result: CrossingResult) -> pd.DataFrame:
    source, target = (case.p, case.r) if result.direction == "P" else (case.r, case.p)
    rows = []
    for label, pts in (
        ("segment", (point_by_id(source, result.a_id), point_by_id(source, result.b_id))),
        ("edge", (point_by_id(target, result.e1_id), point_by_id(target, result.e2_id))),
    ):
        for i, pt in enumerate(pts):
            rows.append({"set": label, "order": i, "id": pt.id, "x": pt.x, "y": pt.y})
    return pd.DataFrame(rows, columns=["set", "order", "id", "x", "y"])


def _render_plot(case: TestCase, result: Optional[CrossingResult]) -> None:
    points = pd.concat([_points_frame("P", case.p), _points_frame("R", case.r)])
    lines = pd.concat([_hull_frame("P", case.p), _hull_frame("R", case.r)])
    if result is not None:
        lines = pd.concat([lines, _crossing_frame(case, result)])
    spec = {
        "layer": [
            {
                "data": {"values": lines.to_dict("records")},
                "mark": {"type": "line", "point": False},
                "encoding": {
                    "x": {"field": "x", "type": "quantitative"},
                    "y": {"field": "y", "type": "quantitative"},
                    "order": {"field": "order"},
                    "color": {"field": "set", "type": "nominal"},
                    "detail": {"field": "set"},
                },
            },
            {
                "data": {"values": points.to_dict("records")},
                "mark": {"type": "point", "filled": True},
                "encoding": {
                    "x": {"field": "x", "type": "quantitative"},
                    "y": {"field": "y", "type": "quantitative"},
                    "color": {"field": "set", "type": "nominal"},
                    "tooltip": [{"field": "set"}, {"field": "id"}, {"field": "x"}, {"field": "y"}],
                },
            },
        ]
    }
    st.vega_lite_chart(spec)


def _configure_search(cfg: SearchConfig) -> SearchConfig:
    st.subheader("Search settings")
    col_near, col_band, col_rand = st.columns(3)
    cfg.near_offsets = int(col_near.number_input("Near offsets", value=cfg.near_offsets, min_value=0))
    cfg.antipodal_band = int(col_band.number_input("Antipodal band", value=cfg.antipodal_band, min_value=0))
    cfg.random_offsets = int(col_rand.number_input("Random offsets", value=cfg.random_offsets, min_value=0))
    seed = st.text_input("Seed (blank for random)", value="" if cfg.seed is None else str(cfg.seed))
    cfg.seed = int(seed) if seed.strip().lstrip("-").isdigit() else None
    cfg.use_fallback = st.checkbox("Containment fallback", value=cfg.use_fallback)
    return cfg


def main() -> None:
    st.title("Survey boundary crossing finder")

    uploaded = st.file_uploader("Upload cases (.txt) or unified CSV", type=["txt", "in", "csv"])
    if not uploaded:
        st.info("Upload a cases file or a unified CSV to inspect both point sets.")
        return

    cases, cfg, error = _load_upload(uploaded.name, uploaded.getvalue())
    if error:
        st.error(error)
        return

    if not cases:
        st.warning("Uploaded file holds no test cases.")
        return

    labels = [case.label or f"case {i}" for i, case in enumerate(cases, start=1)]
    choice = st.selectbox("Test case", range(len(cases)), format_func=lambda i: labels[i])
    case = cases[choice]

    summary = pd.DataFrame([
        {"set": "P", **hull_summary(case.p)},
        {"set": "R", **hull_summary(case.r)},
    ])
    st.dataframe(summary, width="stretch")

    cfg = _configure_search(cfg)

    try:
        result = solve_case(case, cfg)
    except ValueError as exc:
        st.error(f"Validation failed:\n{exc}")
        return

    if result is None:
        st.warning(f"No crossing found ({format_result(result)}).")
    else:
        valid = crossing_is_valid(result, case.p, case.r)
        side = "P segment / hull(R) edge" if result.direction == "P" else "R segment / hull(P) edge"
        st.success(f"Crossing {result.format()} ({side}); verified: {valid}")

    _render_plot(case, result)


if __name__ == "__main__":
    main()
