"""Detection of the installed Salesforce CLI binary."""

import logging
import subprocess
from enum import Enum

from sfdev.sfcli.errors import ToolNotFoundError

logger = logging.getLogger(__name__)


class CliKind(str, Enum):
    """Command dialect of the resolved CLI. The value is the binary name."""

    MODERN = "sf"
    LEGACY = "sfdx"


class CliResolver:
    """Probes candidate binaries once and caches the winner.

    Candidates are tried in order with ``--version``; the first one that exits
    cleanly decides the dialect for the lifetime of this resolver. Pass
    ``kind`` to skip probing entirely (useful in tests).
    """

    def __init__(
        self,
        candidates: tuple[CliKind, ...] | list[CliKind] = (CliKind.MODERN, CliKind.LEGACY),
        kind: CliKind | None = None,
    ):
        self.candidates = tuple(CliKind(c) for c in candidates)
        self._kind = kind

    @property
    def resolved(self) -> bool:
        return self._kind is not None

    def resolve(self) -> CliKind:
        """Return the CLI kind, probing on first use."""
        if self._kind is None:
            self._kind = self._detect()
        return self._kind

    def _detect(self) -> CliKind:
        for candidate in self.candidates:
            if self._probe(candidate.value):
                logger.debug("Resolved Salesforce CLI: %s", candidate.value)
                return candidate
        raise ToolNotFoundError([c.value for c in self.candidates])

    @staticmethod
    def _probe(binary: str) -> bool:
        try:
            result = subprocess.run(
                [binary, "--version"],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError:
            return False
        return result.returncode == 0


_default_resolver: CliResolver | None = None


def default_resolver() -> CliResolver:
    """Get the process-wide resolver, creating it on first use."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = CliResolver()
    return _default_resolver


def configure_resolver(candidates: list[CliKind] | list[str]) -> CliResolver:
    """Replace the process-wide resolver with one probing ``candidates``."""
    global _default_resolver
    _default_resolver = CliResolver(candidates=[CliKind(c) for c in candidates])
    return _default_resolver
