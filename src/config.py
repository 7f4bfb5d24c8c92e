"""Settings loaded from environment variables plus an optional .env file.

Priority: real environment variable > .env entry > default. All keys share
the ADO_ prefix. The .env file is looked up in the current directory.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

ENV_PREFIX = 'ADO'
BACKENDS = ('file', 'memory')
DEFAULT_DIR = Path('.ado')


def _k(suffix: str) -> str:
    return f'{ENV_PREFIX}_{suffix}'


def read_dotenv(path: Path) -> Dict[str, str]:
    """Parse KEY=VALUE lines; blank lines and '#' comments are ignored.
    Only ADO_* keys are kept."""
    values: Dict[str, str] = {}
    if not path.is_file():
        return values
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")
        if k.startswith(ENV_PREFIX + '_'):
            values[k] = v
    return values


def _truthy(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {'0', 'false', 'no', 'off', ''}


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DIR
    backend: str = 'file'
    demo: bool = False
    alt_screen: bool = True
    log_level: str = 'INFO'
    log_file: Optional[Path] = None

    @property
    def resolved_log_file(self) -> Path:
        return self.log_file or self.data_dir / 'ado.log'


def load_settings(environ: Optional[Mapping[str, str]] = None, dotenv: Optional[Path] = None) -> Settings:
    env = os.environ if environ is None else environ
    file_values = read_dotenv(dotenv if dotenv is not None else Path.cwd() / '.env')

    def get(suffix: str) -> Optional[str]:
        raw = env.get(_k(suffix))
        if raw is None or raw.strip() == '':
            raw = file_values.get(_k(suffix))
        return raw

    backend = (get('BACKEND') or 'file').strip().lower()
    if backend not in BACKENDS:
        raise ValueError(f'{_k("BACKEND")} must be one of {", ".join(BACKENDS)}, got {backend!r}')
    level = (get('LOG_LEVEL') or 'INFO').strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f'{_k("LOG_LEVEL")} is not a logging level: {level!r}')
    log_file = get('LOG_FILE')
    return Settings(
        data_dir=Path(get('DIR') or DEFAULT_DIR).expanduser(),
        backend=backend,
        demo=_truthy(get('DEMO'), False),
        alt_screen=_truthy(get('ALT_SCREEN'), True),
        log_level=level,
        log_file=Path(log_file).expanduser() if log_file else None,
    )
