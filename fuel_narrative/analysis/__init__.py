"""Quantitative analysis: scales, box-plot statistics, trendlines, nearest lookup."""

from .boxplot import BoxPlotSummary, group_and_summarize, quantile_sorted, summarize  # noqa: F401
from .nearest import NearestPointIndex  # noqa: F401
from .scales import BandScale, LinearScale, UnknownCategoryError, make_scale, nice_domain  # noqa: F401
from .trendlines import RegressionResult, eval_linear, fit_linear, fit_series  # noqa: F401
