"""Color & style helpers for the shell.

Decisions:
- Colors are applied by the shell on top of already-rendered plain lines;
  the rendering functions themselves never emit escape codes.
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import os, sys
from pathlib import Path
from config import read_dotenv
from models import Status

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    return f"\033[38;5;{16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)}m"

def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_OPEN_DEFAULT = '#48B3AF'
HEX_DONE_DEFAULT = '#A7E399'
HEX_WONT_DEFAULT = '#9A9A9A'

_ENV_OVERRIDES = {k: '#' + v.lstrip('#') for k, v in read_dotenv(Path.cwd() / '.env').items() if _is_hex(v)}

def _resolve(key: str, default: str) -> str:
    """Priority: real env var > .env override > default."""
    value = os.environ.get(key)
    if value and _is_hex(value):
        return '#' + value.lstrip('#')
    return _ENV_OVERRIDES.get(key, default)

HEX_PRIMARY = _resolve('ADO_COLOR_PRIMARY', HEX_PRIMARY_DEFAULT)
HEX_OPEN = _resolve('ADO_COLOR_OPEN', HEX_OPEN_DEFAULT)
HEX_DONE = _resolve('ADO_COLOR_DONE', HEX_DONE_DEFAULT)
HEX_WONT = _resolve('ADO_COLOR_WONT', HEX_WONT_DEFAULT)

STATUS_COLOR = {
    Status.OPEN: _from_hex(HEX_OPEN),
    Status.DONE: _from_hex(HEX_DONE),
    Status.WONT: _from_hex(HEX_WONT) + DIM,
}

HEADER_COLOR = _from_hex(HEX_PRIMARY) + BOLD
SELECTED_STYLE = BOLD
ERROR_COLOR = _from_hex('#E06C75')

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','RESET','BOLD','DIM','STATUS_COLOR','HEADER_COLOR','SELECTED_STYLE','ERROR_COLOR',
    'HEX_PRIMARY','HEX_OPEN','HEX_DONE','HEX_WONT','_ENABLE','_USE_TRUECOLOR','_FORCE'
]
