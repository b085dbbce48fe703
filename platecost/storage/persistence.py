"""Save and restore the last-entered input records.

Each workflow's record is stored as a JSON object keyed by the camelCase
storage keys (``{"developerPrice": 10.0, ...}``) under the workflow's
store key (``flInputs`` / ``trInputs``).
"""
import json
import logging
from typing import Optional, Protocol, Tuple

from ..config.models import InputRecord, Workflow
from ..ingest.form_reader import record_from_mapping, record_to_storage

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InputPersistence:
    """Persistence of the chemistry-free / traditional input pair."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def save(self, chemistry_free: InputRecord, traditional: InputRecord) -> None:
        """Write both records, replacing whatever was stored before."""
        for workflow, record in (
            (Workflow.CHEMISTRY_FREE, chemistry_free),
            (Workflow.TRADITIONAL, traditional),
        ):
            payload = json.dumps(record_to_storage(record), ensure_ascii=False)
            self.store.set_item(workflow.storage_key, payload)
        logger.info("Saved inputs for both workflows")

    def load_one(self, workflow: Workflow) -> Optional[InputRecord]:
        """Stored record for ``workflow``, or ``None`` if absent or corrupt."""
        raw = self.store.get_item(workflow.storage_key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Stored {workflow.storage_key} is not valid JSON, ignoring: {e}")
            return None
        if not isinstance(data, dict):
            # null or a non-object payload: nothing to restore
            return None
        return record_from_mapping(data)

    def load(self) -> Tuple[Optional[InputRecord], Optional[InputRecord]]:
        """Both stored records as ``(chemistry_free, traditional)``."""
        fl = self.load_one(Workflow.CHEMISTRY_FREE)
        tr = self.load_one(Workflow.TRADITIONAL)
        logger.info(
            "Loaded saved inputs: fl=%s tr=%s",
            "yes" if fl else "no",
            "yes" if tr else "no",
        )
        return fl, tr

    def clear(self) -> None:
        """Forget both stored records."""
        for workflow in (Workflow.CHEMISTRY_FREE, Workflow.TRADITIONAL):
            self.store.remove_item(workflow.storage_key)
        logger.info("Cleared saved inputs")
