# rps_wager/ledger.py
# Wager repository: commitment identifier -> Wager record
import json
import logging
import os
from typing import Dict, Iterator, Tuple

from .wager_types import EMPTY_WAGER, Choice, Wager

log = logging.getLogger(__name__)


class WagerRepository:
    """
    Keyed store of wager records.

    get() never fails: an identifier with no record reads as the empty
    wager. Resolved wagers stay stored with amount 0, so exists() tells
    a resolved identifier apart from an unused one.
    """

    def get(self, identifier: bytes) -> Wager:
        raise NotImplementedError

    def put(self, identifier: bytes, wager: Wager) -> None:
        raise NotImplementedError

    def remove(self, identifier: bytes) -> None:
        raise NotImplementedError

    def items(self) -> Iterator[Tuple[bytes, Wager]]:
        raise NotImplementedError

    def exists(self, identifier: bytes) -> bool:
        raise NotImplementedError

    def __contains__(self, identifier: bytes) -> bool:
        return self.exists(identifier)

    def __len__(self) -> int:
        return sum(1 for _ in self.items())


class InMemoryWagerRepository(WagerRepository):

    def __init__(self):
        self._wagers: Dict[bytes, Wager] = {}

    def get(self, identifier: bytes) -> Wager:
        return self._wagers.get(bytes(identifier), EMPTY_WAGER)

    def put(self, identifier: bytes, wager: Wager) -> None:
        self._wagers[bytes(identifier)] = wager

    def remove(self, identifier: bytes) -> None:
        self._wagers.pop(bytes(identifier), None)

    def items(self) -> Iterator[Tuple[bytes, Wager]]:
        return iter(list(self._wagers.items()))

    def exists(self, identifier: bytes) -> bool:
        return bytes(identifier) in self._wagers


class JsonFileWagerRepository(InMemoryWagerRepository):
    """
    In-memory repository persisted to a JSON file after every write.

    The file is replaced atomically, so a crash mid-write leaves the
    previous contents readable.

    Usage:
        repo = JsonFileWagerRepository("wagers.json")
        game = RockPaperScissors(config, repository=repo)
    """

    def __init__(self, storage_path: str = "wagers.json"):
        super().__init__()
        self.storage_path = storage_path
        self._load()

    def _load(self):
        if not os.path.exists(self.storage_path):
            return
        with open(self.storage_path, "r") as f:
            data = json.load(f)
        for key, item in data.get("wagers", {}).items():
            self._wagers[bytes.fromhex(key)] = Wager(
                amount=int(item["amount"]),
                expiry_at=int(item["expiry_at"]),
                opponent=item["opponent"],
                counter_choice=Choice[item["counter_choice"]],
            )

    def _save(self):
        data = {
            "version": "1.0",
            "wagers": {key.hex(): w.to_dict() for key, w in self._wagers.items()},
        }
        tmp_path = self.storage_path + ".tmp"
        try:
            with open(tmp_path, "w") as f:
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.storage_path)
        except Exception:
            log.error("could not save wagers to %s", self.storage_path)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def put(self, identifier: bytes, wager: Wager) -> None:
        super().put(identifier, wager)
        self._save()

    def remove(self, identifier: bytes) -> None:
        super().remove(identifier)
        self._save()
