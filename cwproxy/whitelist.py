"""A proxy contract that lets a set of admins dispatch any message."""

from __future__ import annotations

from typing import Any, Iterable

from .chain import Response, validate_address
from .errors import ContractFrozen, NotFound, Unauthorized
from .state import AdminListResponse

CONTRACT_NAME = "cw1-whitelist"
CONTRACT_VERSION = "0.1.0"


class WhitelistContract:
    """Admins may execute any message; the admin set can be changed until frozen."""

    def __init__(self) -> None:
        self._admins: set[str] = set()
        self._mutable: bool | None = None
        self._version: tuple[str, str] | None = None

    def instantiate(self, sender: str, admins: Iterable[str], mutable: bool) -> Response:
        """Set up the admin set and whether it may change later."""
        validated = [validate_address(admin) for admin in admins]
        self._version = (CONTRACT_NAME, CONTRACT_VERSION)
        self._admins.update(validated)
        self._mutable = bool(mutable)
        return Response()

    def contract_version(self) -> tuple[str, str]:
        """The stored contract name and version."""
        if self._version is None:
            raise NotFound("contract info not found")
        return self._version

    def is_admin(self, addr: str) -> bool:
        return addr in self._admins

    def _load_mutable(self) -> bool:
        if self._mutable is None:
            raise NotFound("bool not found")
        return self._mutable

    def execute(self, sender: str, msgs: Iterable[Any]) -> Response:
        """Pass the messages on if the sender is an admin."""
        if not self.is_admin(sender):
            raise Unauthorized()
        return Response().add_messages(msgs).add_attribute("action", "execute")

    def can_execute(self, sender: str, msg: Any) -> bool:
        """Whether the sender could execute the message."""
        return self.is_admin(sender)

    def freeze(self, sender: str) -> Response:
        """Make the admin set permanent."""
        if not self.is_admin(sender):
            raise Unauthorized()
        self._mutable = False
        return Response().add_attribute("action", "freeze")

    def update_admins(self, sender: str, admins: Iterable[str]) -> Response:
        """Replace the admin set with the given addresses."""
        if not self.is_admin(sender):
            raise Unauthorized()
        if not self._load_mutable():
            raise ContractFrozen()
        wanted = sorted(admins)
        # Validate before touching state, so a failure leaves everything as it was.
        validated = {validate_address(admin) for admin in wanted}
        self._admins = validated
        return Response().add_attribute("action", "update_admins")

    def admin_list(self) -> AdminListResponse:
        """Admins in ascending order and whether they may still change."""
        return AdminListResponse(sorted(self._admins), self._load_mutable())