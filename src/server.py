import asyncio
import hashlib
import os
import sys
import time

from aiohttp import web

import state
from pages import get_hostname, render_landing

DEFAULT_HTTP_HOST = "0.0.0.0"
DEFAULT_HTTP_PORT = 3000

MUTE_PATH = "/mute"
CRASH_DELAY_SECONDS = 0.1    # long enough for the confirmation to flush
CRASH_EXIT_CODE = 1

# PBKDF2 parameters for /heavy, tuned to take roughly 10 s
HEAVY_PASSWORD = b"secret"
HEAVY_SALT = b"salt"
HEAVY_ITERATIONS = 5_000_000
HEAVY_KEY_LENGTH = 64
HEAVY_HASH = "sha512"


def log(message: str) -> None:
    print(f"[HTTP] {message}", flush=True)


# ---------------------------------------------------------------------------
# Mute gate
# ---------------------------------------------------------------------------

@web.middleware
async def mute_gate(request, handler):
    """
    Runs ahead of every route. Once the server is muted, any request other
    than /mute is parked on a future nobody will ever resolve: no response is
    written, the connection stays open, and no CPU is spent on it.
    """
    if state.is_muted() and request.path != MUTE_PATH:
        await asyncio.get_running_loop().create_future()
    return await handler(request)


# ---------------------------------------------------------------------------
# Process control helpers
# ---------------------------------------------------------------------------

def terminate_process(code: int = CRASH_EXIT_CODE) -> None:
    """Exit immediately, skipping aiohttp's graceful shutdown."""
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(code)


def spin_forever() -> None:
    # Must never yield to the event loop.
    while True:
        pass


def derive_key() -> bytes:
    return hashlib.pbkdf2_hmac(
        HEAVY_HASH,
        HEAVY_PASSWORD,
        HEAVY_SALT,
        HEAVY_ITERATIONS,
        dklen=HEAVY_KEY_LENGTH,
    )


# ---------------------------------------------------------------------------
# Route handlers
# ---------------------------------------------------------------------------

async def handle_landing(request):
    """
    GET /
    HTML page showing the hostname and links to the four actions.
    """
    return web.Response(text=render_landing(get_hostname()), content_type="text/html")


async def handle_crash(request):
    """
    GET /crash
    Confirms, then kills the whole process with exit status 1 about 100 ms
    later. Nothing is served afterwards.
    """
    log("Crashing the server")
    asyncio.get_running_loop().call_later(CRASH_DELAY_SECONDS, terminate_process, CRASH_EXIT_CODE)
    return web.Response(text="Crashing the server now")


async def handle_freeze(request):
    """
    GET /freeze
    Hands the confirmation to the transport, then busy-loops on the event
    loop thread. Every later request, /mute included, hangs until the process
    is restarted from outside.
    """
    log("Freezing the server")
    response = web.Response(text="Freezing the server")
    await response.prepare(request)
    await response.write_eof()
    spin_forever()
    return response


async def handle_mute(request):
    """
    GET /mute
    Flips the mute flag for good. This request and later /mute requests
    still get an answer; everything else goes silent.
    """
    state.mute()
    log("Muting the server")
    return web.Response(text="Muting the server")


async def handle_heavy(request):
    """
    GET /heavy
    Runs a ~10 s PBKDF2 derivation on the default thread pool so the event
    loop stays free for other clients.

    Response text:
        "Heavy Calculation Done! Took <seconds> seconds"
    Responds 500 if the derivation itself fails.
    """
    log("Heavy calculation started")
    loop = asyncio.get_running_loop()
    start = time.monotonic()
    try:
        await loop.run_in_executor(None, derive_key)
    except Exception as e:
        log(f"Heavy calculation failed: {e!r}")
        return web.Response(status=500, text="Heavy calculation failed")
    elapsed = time.monotonic() - start
    return web.Response(text=f"Heavy Calculation Done! Took {elapsed:.3f} seconds")


# ---------------------------------------------------------------------------
# App factory + server runner
# ---------------------------------------------------------------------------

def build_app() -> web.Application:
    app = web.Application(middlewares=[mute_gate])
    app.router.add_get("/", handle_landing)
    app.router.add_get("/crash", handle_crash)
    app.router.add_get("/freeze", handle_freeze)
    app.router.add_get(MUTE_PATH, handle_mute)
    app.router.add_get("/heavy", handle_heavy)
    return app


def start_http_server(host: str, port: int) -> None:
    """
    Runs the aiohttp server on a fresh asyncio event loop in the calling
    thread and blocks forever. All request handling shares this one loop,
    which is what lets /freeze starve every other client.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    app = build_app()
    runner = web.AppRunner(app)

    async def _run():
        await runner.setup()
        site = web.TCPSite(runner, host, port)
        await site.start()
        log(f"Horrible Server listening on http://{host}:{port}")
        while True:
            await asyncio.sleep(3600)

    loop.run_until_complete(_run())
