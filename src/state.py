# ---------------------------------------------------------------------------
# Shared server state
#
# Written by the /mute handler and read by the mute gate on every request.
# Both run on the single event loop thread, and the flag only ever flips
# from False to True, so no locking is needed. A request racing the flip is
# at worst served one last time.
# ---------------------------------------------------------------------------

server_state: dict = {
    "muted": False,   # once True, only /mute gets answered
}


def is_muted() -> bool:
    return server_state["muted"]


def mute() -> None:
    """Silence the server for the rest of the process lifetime. There is no unmute."""
    server_state["muted"] = True


def reset() -> None:
    """Restore the startup state. Tests only; the running server never unmutes."""
    server_state["muted"] = False
