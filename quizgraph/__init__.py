from quizgraph.errors import PlotSpecError, PlotStateError
from quizgraph.interaction import OverlayEvent, parse_input_event
from quizgraph.overlay import Crosshair, InteractionOverlay
from quizgraph.plot import InteractivePlot, PlotHost
from quizgraph.points import PlacedPointStore
from quizgraph.scales import CoordinateMapper, ScreenPoint
from quizgraph.scene import PlotScene
from quizgraph.shading import ShadedRegion, shade_ranges
from quizgraph.spec import AxisSpec, DataPoint, LineSpec, PlotMode, PlotSpec, ShadeRange
from quizgraph.style import PlotLayout, PlotStyle

__all__ = [
    "AxisSpec",
    "CoordinateMapper",
    "Crosshair",
    "DataPoint",
    "InteractionOverlay",
    "InteractivePlot",
    "LineSpec",
    "OverlayEvent",
    "PlacedPointStore",
    "PlotHost",
    "PlotLayout",
    "PlotMode",
    "PlotScene",
    "PlotSpec",
    "PlotSpecError",
    "PlotStateError",
    "PlotStyle",
    "ScreenPoint",
    "ShadeRange",
    "ShadedRegion",
    "parse_input_event",
    "shade_ranges",
]
