"""Globe tour engine: guided, autoplaying tours of locations on a 3D globe."""

from globe_tour.core.engine import EngineStatus, TourEngine

__version__ = "0.1.0"

__all__ = ["EngineStatus", "TourEngine", "__version__"]
