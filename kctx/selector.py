import shutil
import subprocess

from kctx.errors import SelectionCancelled, ToolMissing
from kctx.logger import get_logger

log = get_logger("selector")


def selector_available(fzf: str = "fzf") -> bool:
    return shutil.which(fzf) is not None


def choose(text: str, fzf: str = "fzf") -> str:
    """Let the user pick one line of ``text`` with fzf.

    fzf draws on the terminal itself, so only stdout is captured. An empty
    result (Esc, Ctrl-C or no match) raises ``SelectionCancelled``.
    """
    cmd = [fzf, "--ansi", "--no-preview"]
    log.debug("running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, input=text, stdout=subprocess.PIPE, text=True)
    except FileNotFoundError as e:
        raise ToolMissing(fzf) from e
    choice = (result.stdout or "").strip()
    if result.returncode != 0 or not choice:
        log.debug("fzf exited %d with no choice", result.returncode)
        raise SelectionCancelled()
    return choice
