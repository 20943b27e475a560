import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

APP_NAME = "kctx"
STATE_FILE_NAME = "state.json"

DEFAULT_CURRENT_FGCOLOR = "\033[33m"
DEFAULT_CURRENT_BGCOLOR = ""

TRUTHY = ("1", "true", "yes", "on")


def get_environ_variable(environ: Mapping[str, str], name: str) -> Optional[str]:
    """Return the variable's value, treating empty strings as unset"""
    value = environ.get(name)
    return value if value else None


def is_truthy(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in TRUTHY


def default_cache_dir(environ: Mapping[str, str]) -> Path:
    """Resolve where the state file lives"""
    override = get_environ_variable(environ, "KCTX_CACHE_DIR")
    if override:
        return Path(override).expanduser()
    xdg = get_environ_variable(environ, "XDG_CACHE_HOME")
    if xdg:
        return Path(xdg).expanduser() / APP_NAME
    return Path.home() / ".kube" / APP_NAME


@dataclass
class Settings:
    """Runtime settings read from the environment"""
    cache_dir: Path
    force_color: bool = False
    no_color: bool = False
    ignore_fzf: bool = False
    current_fgcolor: str = DEFAULT_CURRENT_FGCOLOR
    current_bgcolor: str = DEFAULT_CURRENT_BGCOLOR
    kubectl: str = "kubectl"
    fzf: str = "fzf"
    shell: str = "/bin/sh"
    log_level: str = "WARNING"

    @property
    def state_path(self) -> Path:
        return self.cache_dir / STATE_FILE_NAME

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None) -> "Settings":
        env = os.environ if environ is None else environ
        fg = env.get("KCTX_CURRENT_FGCOLOR")
        bg = env.get("KCTX_CURRENT_BGCOLOR")
        return cls(
            cache_dir=default_cache_dir(env),
            force_color=is_truthy(get_environ_variable(env, "KCTX_FORCE_COLOR")),
            no_color=get_environ_variable(env, "NO_COLOR") is not None,
            ignore_fzf=get_environ_variable(env, "KCTX_IGNORE_FZF") is not None,
            current_fgcolor=DEFAULT_CURRENT_FGCOLOR if fg is None else fg,
            current_bgcolor=DEFAULT_CURRENT_BGCOLOR if bg is None else bg,
            kubectl=get_environ_variable(env, "KCTX_KUBECTL") or "kubectl",
            fzf=get_environ_variable(env, "KCTX_FZF") or "fzf",
            shell=get_environ_variable(env, "SHELL") or "/bin/sh",
            log_level=(get_environ_variable(env, "KCTX_LOG_LEVEL") or "WARNING").upper(),
        )
