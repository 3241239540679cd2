import html
import socket

# ---------------------------------------------------------------------------
# Landing page
# ---------------------------------------------------------------------------

ACTIONS = [
    (
        "/crash",
        "Crash server",
        "Click here to crash this server. The Python process will exit with "
        "status 1. Future requests won't be served.",
    ),
    (
        "/freeze",
        "Freeze server",
        "Click here to freeze the server. The Python process will enter an "
        "infinite loop, causing it to become unresponsive, also to future requests.",
    ),
    (
        "/mute",
        "Mute server",
        "Click here to mute the server. The Python process will stop responding "
        "to all future requests - but without using any CPU.",
    ),
    (
        "/heavy",
        "Calculate things on the server (10s)",
        "The Python process will run some heavy calculations for 10s. However, "
        "it will still be responsive to other requests.",
    ),
]

_PAGE = """<html>
<head>
    <title>Horrible Project</title>
    <style>
        body {{
            background-color: #1a1a1a;
            color: #ffffff;
            font-family: sans-serif;
            padding: 40px;
            line-height: 1.5;
        }}
        h1, h2 {{ text-align: center; }}
        h2 {{ color: #cccccc; font-weight: normal; }}
        ul {{ max-width: 800px; margin: 0 auto; }}
        li {{ margin-bottom: 30px; }}
        a {{
            color: #fff;
            text-decoration: underline;
            font-size: 1.2em;
            font-weight: bold;
        }}
        a:hover {{ color: #aaa; }}
        p.desc {{ margin-top: 5px; color: #cccccc; }}
    </style>
</head>
<body>
    <h1>What do you want to do?</h1>
    <h2>The hostname is: {hostname}</h2>

    <div style="max-width: 800px; margin: 0 auto;">
        <p>Welcome to this horrible project. Please choose what you want to do:</p>
    </div>

    <ul>
{items}
    </ul>
</body>
</html>
"""

_ITEM = """        <li>
            <a href="{path}">{label}</a>
            <p class="desc">{description}</p>
        </li>"""


def get_hostname() -> str:
    """Hostname shown on the landing page, or "" if the OS won't tell us."""
    try:
        return socket.gethostname()
    except OSError:
        return ""


def render_landing(hostname: str) -> str:
    items = "\n".join(
        _ITEM.format(path=path, label=label, description=description)
        for path, label, description in ACTIONS
    )
    return _PAGE.format(hostname=html.escape(hostname), items=items)
