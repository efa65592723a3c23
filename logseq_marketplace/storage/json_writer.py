import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from logseq_marketplace.domain.models import OutputRecord

logger = logging.getLogger(__name__)


def dump_records(records: Iterable[OutputRecord]) -> str:
    """
    Serialize records the way the site expects them: a two-space indented
    JSON array, non-ASCII text kept as is.
    """
    payload: List[Dict[str, Any]] = [record.model_dump() for record in records]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def write_records(path: Path, records: Iterable[OutputRecord]) -> None:
    """
    Overwrite *path* with the serialized records.
    """
    path.write_text(dump_records(records), encoding="utf-8")
    logger.debug(f"Wrote {path}")


def read_records(path: Path) -> List[Dict[str, Any]]:
    return json.loads(path.read_text(encoding="utf-8"))
