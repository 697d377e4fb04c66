"""player_explorer: interactive scatter/bar exploration of player statistics."""

from .bar_chart import BarChartView, build_bar_view, rank_entities
from .config import ExplorerConfig
from .entities import (
    VIEWS,
    AxisConfig,
    Entity,
    EntityStore,
    axis_config,
    metric_label,
)
from .filtering import (
    FilterPredicate,
    filter_entities,
    matches_search,
    plottable,
    search_suggestions,
)
from .io import entities_from_dataframe, load_entities
from .scales import IDENTITY, CoordinateMapper, LinearScale, ZoomTransform
from .stats import RegressionLine, correlation, mean, regression_line
from .visualization.colors import category_color, hex_to_rgb
from .explorer import ExplorerState, SceneFrame, build_scene

__all__ = [
    # data
    "Entity",
    "EntityStore",
    "AxisConfig",
    "VIEWS",
    "axis_config",
    "metric_label",
    # io
    "load_entities",
    "entities_from_dataframe",
    # filtering
    "FilterPredicate",
    "filter_entities",
    "plottable",
    "matches_search",
    "search_suggestions",
    # statistics
    "RegressionLine",
    "regression_line",
    "correlation",
    "mean",
    # scales
    "LinearScale",
    "ZoomTransform",
    "IDENTITY",
    "CoordinateMapper",
    # explorer
    "ExplorerConfig",
    "ExplorerState",
    "SceneFrame",
    "build_scene",
    # bar chart
    "BarChartView",
    "build_bar_view",
    "rank_entities",
    # visualization
    "category_color",
    "hex_to_rgb",
]
