"""ASCII drawing of time trees."""

from .ascii_layout import (
    PlotConfig,
    age_to_column,
    build_grid,
    compute_vertical_positions,
    render_ascii,
    render_with_config,
)

__all__ = [
    "PlotConfig",
    "age_to_column",
    "build_grid",
    "compute_vertical_positions",
    "render_ascii",
    "render_with_config",
]
