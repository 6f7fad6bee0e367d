"""Exception hierarchy for linking and deployment failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linkdeploy.contracts.ids import Contract


class DeployError(Exception):
    """Base class for every error raised by linkdeploy.

    ``contract`` names the artifact whose linking or deployment step failed,
    when that is known at the point the error is raised.
    """

    def __init__(self, message: str, contract: Contract | None = None) -> None:
        super().__init__(message)
        self.contract = contract


class LinkingError(DeployError):
    """A library reference is still unresolved after linking."""

    def __init__(self, reference: str, contract: Contract | None = None, detail: str = "") -> None:
        target = f" in {contract.name}" if contract is not None else ""
        message = detail or f"unresolved library reference {reference!r}{target}"
        super().__init__(message, contract)
        self.reference = reference


class ArtifactLoadError(DeployError):
    """An embedded bytecode template is malformed.

    Templates are part of the build, so this always points at a packaging
    defect rather than a runtime condition.
    """

    def __init__(self, template: str, reason: str) -> None:
        super().__init__(f"malformed bytecode template {template!r}: {reason}")
        self.template = template
        self.reason = reason


class BackendError(DeployError):
    """The deployment backend rejected or failed a transaction."""


class DeploymentError(DeployError):
    """Deploying ``contract`` failed; ``__cause__`` holds the underlying error."""

    def __init__(self, contract: Contract, cause: BaseException) -> None:
        super().__init__(
            f"failed to deploy {contract.name}: {type(cause).__name__}: {cause}",
            contract,
        )
        self.cause = cause
