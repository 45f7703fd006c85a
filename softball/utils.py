"""File I/O, lenient number parsing and display formatting helpers."""

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('softball.utils')

_INT_PREFIX = re.compile(r'^\s*([+-]?\d+)')
_FLOAT_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+))')


def load_json(path: Path | str, schema: type[T] | None = None) -> Any | T:
    """
    Read a JSON file, optionally validating it into a pydantic model.

    Args:
        path: File to read
        schema: Model class the document must satisfy

    Returns:
        The decoded document, or a ``schema`` instance

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        ValueError: If the document does not satisfy ``schema``

    Example:
        from softball.schemas import TournamentFile
        data = load_json('data/tournament.json', schema=TournamentFile)
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f'File not found: {path}')

    text = path.read_text(encoding='utf-8')
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f'{path}: invalid JSON at line {e.lineno}, column {e.colno}')
        raise

    if schema is None:
        return data

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path}: {e.error_count()} schema error(s)')
        raise ValueError(f'{path} does not match {schema.__name__}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """
    Write ``data`` as JSON, replacing the file atomically.

    The document is written to a temporary file next to ``path`` and moved
    into place, so a failed write never leaves a truncated tournament file.
    Pydantic models are dumped in JSON mode first, leaving out fields that
    were never set so defaults are not written back into the file.

    Raises:
        TypeError: If ``data`` is not JSON-serializable
        OSError: If the file cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(data, BaseModel):
        data = data.model_dump(mode='json', exclude_unset=True)
    text = json.dumps(data, indent=indent, ensure_ascii=False)

    fd, tmp_name = tempfile.mkstemp(prefix=f'.{path.name}.', dir=path.parent)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(text)
            f.write('\n')
        os.replace(tmp_name, path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug(f'Wrote {path}')


def load_json_safe(path: Path | str, default: Any = None, schema: type[T] | None = None) -> Any | T:
    """Like load_json, but return ``default`` when the file is missing or invalid."""
    try:
        return load_json(path, schema=schema)
    except FileNotFoundError:
        return default
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning(f'Ignoring unreadable {path}: {e}')
        return default


def parse_int(value: Any) -> int:
    """
    Parse a user-typed value as an integer, never raising.

    Leading digits are honoured ("12abc" -> 12, "4.7" -> 4); anything
    unparseable becomes 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else 0


def parse_float(value: Any) -> float:
    """Parse a user-typed value as a float, falling back to 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    match = _FLOAT_PREFIX.match(str(value))
    return float(match.group(1)) if match else 0.0


def parse_optional_int(value: Any) -> int | None:
    """Like parse_int, but empty input (None or blank string) stays unset."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_int(value)


def format_average(avg: float) -> str:
    """Format a batting average the box-score way: 0.333 -> '.333'."""
    text = f'{avg:.3f}'
    return text[1:] if text.startswith('0') else text


def format_games_behind(games_behind: float) -> str:
    """Format games-behind: leader shows '-', half games keep one decimal."""
    if games_behind == 0:
        return '-'
    if games_behind == int(games_behind):
        return str(int(games_behind))
    return f'{games_behind:.1f}'


def format_era(era: float) -> str:
    return f'{era:.2f}'
