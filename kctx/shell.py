import os

from kctx.errors import KctxError
from kctx.logger import get_logger
from kctx.models import ShellHandoff

log = get_logger("shell")


def hand_off(handoff: ShellHandoff, shell: str):
    """Enter the context's directory and replace this process with ``shell``.

    An empty directory keeps the current working directory. Does not
    return on success.
    """
    if handoff.directory:
        directory = os.path.expanduser(handoff.directory)
        try:
            os.chdir(directory)
        except OSError as e:
            raise KctxError(f'cannot change directory to "{directory}": {e.strerror}') from e
    log.debug("exec %s in %s", shell, os.getcwd())
    try:
        os.execvp(shell, [shell])
    except OSError as e:
        raise KctxError(f'failed to start shell "{shell}": {e.strerror}') from e
