from __future__ import annotations

from esper import World

from bubbleshot.components.game_state import FlightPhase, GameState
from bubbleshot.components.score import Score
from bubbleshot.events.bus import EVENT_FLIGHT_PHASE_CHANGED, EventBus


def get_game_state(world: World) -> GameState | None:
    for _, state in world.get_component(GameState):
        return state
    return None


def get_score(world: World) -> Score | None:
    for _, score in world.get_component(Score):
        return score
    return None


def set_flight_phase(world: World, event_bus: EventBus, phase: FlightPhase) -> None:
    """Update the global flight phase and emit a change event when it differs."""

    state = get_game_state(world)
    if state is None:
        state = GameState(phase=phase)
        world.create_entity(state)
        event_bus.emit(EVENT_FLIGHT_PHASE_CHANGED, previous_phase=None, new_phase=phase)
        return
    previous_phase = state.phase
    if previous_phase == phase:
        return
    state.phase = phase
    event_bus.emit(EVENT_FLIGHT_PHASE_CHANGED, previous_phase=previous_phase, new_phase=phase)
