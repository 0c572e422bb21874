# rps_wager/gate.py
# Administrative gate: owner authorization and the alive/pause switch
import logging

from .errors import Unauthorized

log = logging.getLogger(__name__)


class AdminGate:
    """Capability consulted by the engine before every mutating operation."""

    def is_authorized(self, caller: str) -> bool:
        raise NotImplementedError

    def is_active(self) -> bool:
        raise NotImplementedError


class OwnerGate(AdminGate):
    """Single owner who may change commission and flip the alive switch."""

    def __init__(self, owner: str, alive: bool = True):
        self.owner = owner
        self._alive = alive

    def is_authorized(self, caller: str) -> bool:
        return caller == self.owner

    def is_active(self) -> bool:
        return self._alive

    def _require_owner(self, caller: str):
        if not self.is_authorized(caller):
            raise Unauthorized()

    def set_alive(self, caller: str, alive: bool):
        self._require_owner(caller)
        self._alive = bool(alive)
        log.info("alive switch set to %s by %s", self._alive, caller)

    def transfer_ownership(self, caller: str, new_owner: str):
        self._require_owner(caller)
        log.info("ownership transferred %s -> %s", self.owner, new_owner)
        self.owner = new_owner
