from .chart import (
    plot_histograms,
    plot_scatter,
    plot_tier_results,
    plot_top_bar,
)

__all__ = [
    "plot_histograms",
    "plot_scatter",
    "plot_tier_results",
    "plot_top_bar",
]
