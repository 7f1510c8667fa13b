from .stage_10_network import NetworkStage
from .stage_20_scoop import ScoopStage
from .stage_30_winget import WingetStage
from .stage_40_profile import ProfileStage

__all__ = [
    "NetworkStage",
    "ScoopStage",
    "WingetStage",
    "ProfileStage",
]
