"""JSON-based repository for kingdom ledgers."""

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter

from reignmaker.domain import models as dm


class JsonKingdomRepository:
    """Persist kingdoms as JSON snapshots on disk."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._adapter: TypeAdapter[dm.Kingdom] = TypeAdapter(dm.Kingdom)

    def _path_for(self, kingdom_id: dm.KingdomID) -> Path:
        return self.base_path / f"kingdom_{int(kingdom_id)}.json"

    def save(self, kingdom: dm.Kingdom) -> Path:
        """Serialize a kingdom to disk and return the snapshot path."""

        path = self._path_for(kingdom.id)
        path.write_bytes(self._adapter.dump_json(kingdom, indent=2))
        return path

    def load(self, kingdom_id: dm.KingdomID) -> dm.Kingdom:
        """Load a previously saved kingdom; raises ``FileNotFoundError``."""

        data = self._path_for(kingdom_id).read_bytes()
        return self._adapter.validate_json(data)

    def exists(self, kingdom_id: dm.KingdomID) -> bool:
        return self._path_for(kingdom_id).exists()

    def list_kingdoms(self) -> list[dm.KingdomID]:
        """Return all kingdom ids currently persisted in the repository."""

        ids: list[dm.KingdomID] = []
        prefix = "kingdom_"
        suffix = ".json"
        for path in self.base_path.glob("kingdom_*.json"):
            raw = path.name[len(prefix) : -len(suffix)]
            try:
                ids.append(dm.KingdomID(int(raw)))
            except ValueError:  # pragma: no cover - ignored malformed file
                continue
        return sorted(ids, key=int)
