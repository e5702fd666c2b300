"""JSON persistence for rate sheet snapshots.

Ineligible cells are written as ``null`` and cells without an entry are left
out, so a save/load round trip keeps "absent", "zero" and "ineligible" apart.
"""
import json
import logging
import os
from typing import Iterable, List, Optional

from pydantic import TypeAdapter

from quickprice.models import Program
from quickprice.presets import DEFAULT_PROGRAMS

logger = logging.getLogger(__name__)

PROGRAMS_FILE = os.environ.get("QUICKPRICE_PROGRAMS_FILE", "rate_sheets.json")
FORMAT_VERSION = "1.0"

_programs = TypeAdapter(List[Program])


def programs_to_json(programs: Iterable[Program]) -> str:
    data = {
        "version": FORMAT_VERSION,
        "rateSheets": [p.model_dump(mode="json") for p in programs],
    }
    return json.dumps(data, ensure_ascii=False, indent=2)


def programs_from_json(text: str) -> List[Program]:
    """Parse a snapshot written by ``programs_to_json`` (or a bare list)."""
    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("rateSheets", [])
    return _programs.validate_python(data)


def load_programs(path: Optional[str] = None) -> List[Program]:
    """Load programs from ``path``; the built-in sheets when the file is missing."""
    path = path or PROGRAMS_FILE
    if not os.path.exists(path):
        logger.debug("%s not found, using default rate sheets", path)
        return list(DEFAULT_PROGRAMS)
    with open(path, "r", encoding="utf-8") as f:
        programs = programs_from_json(f.read())
    logger.info("loaded %d rate sheets from %s", len(programs), path)
    return programs


def save_programs(programs: Iterable[Program], path: Optional[str] = None) -> None:
    path = path or PROGRAMS_FILE
    with open(path, "w", encoding="utf-8") as f:
        f.write(programs_to_json(programs))
    logger.info("saved rate sheets to %s", path)


def active_programs(programs: Iterable[Program]) -> List[Program]:
    return [p for p in programs if p.is_active]
