import click


class KctxError(click.ClickException):
    """Base error; click prints it to stderr and exits with status 1"""
    exit_code = 1


class ToolMissing(KctxError):
    def __init__(self, tool: str):
        super().__init__(f"'{tool}' not found in PATH, is it installed?")
        self.tool = tool


class StoreLookupError(KctxError):
    """kubeconfig could not be read or parsed"""


class StoreCommandError(KctxError):
    """A store mutation failed for a reason other than a missing context"""


class ContextNotFound(KctxError):
    def __init__(self, name: str):
        super().__init__(f'no context exists with the name: "{name}"')
        self.name = name


class NoCurrentContext(KctxError):
    def __init__(self, message: str = "current-context is not set"):
        super().__init__(message)


class NoPreviousContext(KctxError):
    def __init__(self, message: str = "no previous context found"):
        super().__init__(message)


class SelectionCancelled(KctxError):
    def __init__(self, message: str = "you did not choose any of the options"):
        super().__init__(message)


class StateError(KctxError):
    """The local state file could not be read or written"""


class StateReadError(StateError):
    pass


class StateWriteError(StateError):
    pass
