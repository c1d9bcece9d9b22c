"""Play mode: kinematic actor and simulator."""

from .actor import ActorInput, ActorSettings, ActorState, MoveKey, PlaySimulator, step

__all__ = ["ActorInput", "ActorSettings", "ActorState", "MoveKey", "PlaySimulator", "step"]
