from .core.events import NEW_LISTENER, REMOVE_LISTENER, Emitter
from .core.events import global_emitter, global_emitter as emitter
from .core.listener import Listener
from .core.matcher import ALL_EVENTS, match, pattern_matches

__all__: list[str] = [
    "emitter",
    "global_emitter",
    "Emitter",
    "Listener",
    "ALL_EVENTS",
    "NEW_LISTENER",
    "REMOVE_LISTENER",
    "match",
    "pattern_matches",
]
