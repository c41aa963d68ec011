# cubic_sim/core/__init__.py
from cubic_sim.core.cube_model import Cubie, CubeModel
from cubic_sim.core.engine import CubeEngine, EngineEvent, MoveEvent, MoveResult

__all__ = ["Cubie", "CubeModel", "CubeEngine", "EngineEvent", "MoveEvent", "MoveResult"]
