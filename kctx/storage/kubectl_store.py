import json
import shutil
import subprocess
from typing import List

from kctx.errors import (ContextNotFound, NoCurrentContext, StoreCommandError,
                         StoreLookupError, ToolMissing)
from kctx.logger import get_logger
from kctx.storage.context_store import ContextStore

log = get_logger("kubectl")


class KubectlContextStore(ContextStore):
    """Context store backed by ``kubectl config`` subcommands"""

    def __init__(self, kubectl: str = "kubectl"):
        if shutil.which(kubectl) is None:
            raise ToolMissing(kubectl)
        self.kubectl = kubectl

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        """Run ``kubectl config <args>`` and capture its output"""
        cmd = [self.kubectl, "config", *args]
        log.debug("running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise ToolMissing(self.kubectl) from e
        if result.returncode != 0:
            log.debug("%s exited %d: %s", cmd[0], result.returncode, result.stderr.strip())
        return result

    @staticmethod
    def _error_text(result: subprocess.CompletedProcess) -> str:
        text = (result.stderr or result.stdout or "").strip()
        return text[len("error: "):] if text.startswith("error: ") else text

    def _mutate(self, name: str, *args: str):
        result = self._run(*args)
        if result.returncode == 0:
            return
        message = self._error_text(result)
        if "no context exists" in message or "not in" in message or "cannot find" in message:
            raise ContextNotFound(name)
        raise StoreCommandError(message or f"kubectl config {args[0]} failed")

    def list_contexts(self) -> List[str]:
        result = self._run("get-contexts", "-o=name")
        if result.returncode != 0:
            raise StoreLookupError(f"error getting context list from kubeconfig: {self._error_text(result)}")
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def current_context(self) -> str:
        result = self._run("current-context")
        message = self._error_text(result)
        if result.returncode != 0:
            if "not set" in message:
                raise NoCurrentContext()
            raise StoreLookupError(f"failed to read current context: {message}")
        name = result.stdout.strip()
        if not name:
            raise NoCurrentContext()
        return name

    def use_context(self, name: str):
        self._mutate(name, "use-context", name)

    def namespace_of(self, name: str) -> str:
        result = self._run("view", "-o", "json")
        if result.returncode != 0:
            raise StoreLookupError(f"failed to read kubeconfig: {self._error_text(result)}")
        try:
            config = json.loads(result.stdout or "{}")
        except json.JSONDecodeError as e:
            raise StoreLookupError(f"failed to parse kubeconfig: {e}") from e
        for entry in config.get("contexts") or []:
            if entry.get("name") == name:
                return (entry.get("context") or {}).get("namespace") or ""
        raise ContextNotFound(name)

    def rename_context(self, old_name: str, new_name: str):
        self._mutate(old_name, "rename-context", old_name, new_name)

    def delete_context(self, name: str):
        # delete-context leaves the referenced user and cluster entries intact
        self._mutate(name, "delete-context", name)

    def unset_current(self):
        result = self._run("unset", "current-context")
        if result.returncode != 0:
            raise StoreCommandError(self._error_text(result) or "failed to unset current context")
