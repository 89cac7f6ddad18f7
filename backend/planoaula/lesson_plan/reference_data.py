"""Carregamento das bases de referência curricular (BNCC e SAEB)."""
import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from planoaula.core.exceptions import ReferenceDataError
from planoaula.core.logging import get_logger

logger = get_logger("reference_data")


@dataclass(frozen=True)
class ReferenceData:
    """Bases somente leitura, repassadas ao modelo sem transformação."""
    bncc: Any
    saeb: Any


def _read_json(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.error("Reference data file not found", path=path)
        raise ReferenceDataError(path, "arquivo não encontrado")
    except json.JSONDecodeError as e:
        logger.error("Reference data file is not valid JSON", path=path, error=str(e))
        raise ReferenceDataError(path, f"JSON inválido: {e.msg}")


@lru_cache(maxsize=8)
def load_reference_data(bncc_path: str, saeb_path: str) -> ReferenceData:
    data = ReferenceData(bncc=_read_json(bncc_path), saeb=_read_json(saeb_path))
    logger.info(
        "Reference data loaded",
        bncc_file=Path(bncc_path).name,
        saeb_file=Path(saeb_path).name,
    )
    return data
