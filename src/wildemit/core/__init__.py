from .events import Emitter, global_emitter, global_emitter as emitter
from .listener import Listener, same_callback
from .matcher import ALL_EVENTS, match

__all__ = [
    "emitter",
    "global_emitter",
    "Emitter",
    "Listener",
    "same_callback",
    "ALL_EVENTS",
    "match",
]
