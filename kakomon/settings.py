"""Project settings for kakomon.

Runtime values that are not secret live here as module constants.  The
webhook destination and the list of pages to watch are deployment specific
and are read from the ``CONFIG`` environment variable by
:mod:`kakomon.config`.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Configuration source
# ---------------------------------------------------------------------------
CONFIG_ENV_VAR = "CONFIG"

# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------
DOWNLOAD_TIMEOUT = 30

USER_AGENT = "KakomonNotifier/0.1 (+https://github.com/user/kakomon-notifier)"

# ---------------------------------------------------------------------------
# Markup markers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Markers:
    """Class attribute values that identify the parts of an item on a page.

    Each value is compared against the *whole* ``class`` attribute, so an
    element carrying extra classes does not match.
    """

    fragment: str = "kako"
    statement: str = "mondai"
    title: str = "anslink"
    choices: str = "ansbg"


DEFAULT_MARKERS = Markers()

# Selector for answer choices inside a choices container
CHOICE_SELECTOR = "ul > li"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
