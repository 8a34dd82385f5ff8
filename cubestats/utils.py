"""Small helpers: string trimming, plot tick spacing, EPS output and byte order."""

from __future__ import annotations

import math
import sys
from typing import TextIO

__all__ = [
    "trim_string",
    "auto_tick",
    "write_eps_header",
    "write_eps_footer",
    "is_little_endian",
    "swap_byte_order",
]

# Characters treated as whitespace by the C locale's isspace().
_C_WHITESPACE = " \t\n\v\f\r"

_EPS_PROCEDURES = (
    "/m {moveto} bind def",
    "/l {lineto} bind def",
    "/a {arc} bind def",
    "/af {arc fill} bind def",
    "/as {arc stroke} bind def",
    "/s {stroke} bind def",
    "/f {fill} bind def",
    "/rgb {setrgbcolor} bind def",
    "/np {newpath} bind def",
    "/cp {closepath} bind def",
    "/lw {setlinewidth} bind def",
    "/roman {/Helvetica findfont 12 scalefont setfont} bind def",
    "/greek {/Symbol findfont 12 scalefont setfont} bind def",
    "/ellipse {gsave /scf exch def /pa exch def /rmin exch def /rmaj exch def "
    "/posy exch def /posx exch def 0.5 setlinewidth newpath posx posy translate "
    "matrix currentmatrix 1 scf scale pa rotate 1 rmin rmaj div scale "
    "0 0 rmaj 0 360 arc closepath setmatrix stroke grestore} bind def",
)

_SWAPPABLE_SIZES = (2, 4, 8)


def trim_string(text: str) -> str:
    """Return ``text`` without leading and trailing ASCII whitespace."""
    return text.strip(_C_WHITESPACE)


def auto_tick(span: float, n: int) -> float:
    """Return a tick interval of 1, 2, 5 or 10 times a power of ten.

    The interval is chosen so that roughly ``n`` ticks cover ``span``.
    A span of zero yields an interval of zero.
    """
    if n < 1:
        raise ValueError("number of tick marks must be at least 1")

    tick = abs(span) / n
    if tick == 0.0:
        return 0.0
    if math.isnan(tick) or math.isinf(tick):
        raise ValueError("plot range must be finite")

    scale = 10.0 ** math.floor(math.log10(tick))
    ratio = tick / scale

    dist1 = abs(ratio - 1.0)
    dist2 = abs(ratio - 2.0)
    dist3 = abs(ratio - 5.0)
    dist4 = abs(ratio - 10.0)

    if dist1 < dist2:
        return 1.0 * scale
    if dist2 < dist3:
        return 2.0 * scale
    if dist3 < dist4:
        return 5.0 * scale
    return 10.0 * scale


def write_eps_header(fp: TextIO, title: str, creator: str, bbox: str) -> None:
    """Write an EPS header with title, creator, bounding box and procedures.

    ``bbox`` has the form ``"xmin ymin xmax ymax"``.
    """
    lines = [
        "%!PS-Adobe-3.0 EPSF-3.0",
        f"%%Title: {title}",
        f"%%Creator: {creator}",
        f"%%BoundingBox: {bbox}",
        "%%EndComments",
        *_EPS_PROCEDURES,
    ]
    fp.write("\n".join(lines) + "\n")


def write_eps_footer(fp: TextIO) -> None:
    """Write the closing lines of an EPS document."""
    fp.write("showpage\n%%EndDocument\n")


def is_little_endian() -> bool:
    """Return true if the machine stores multi-byte words little-endian."""
    return sys.byteorder == "little"


def swap_byte_order(word: bytes | bytearray) -> bytes:
    """Return ``word`` with its byte order reversed.

    Only words of 2, 4 or 8 bytes are swapped; other sizes come back unchanged.
    """
    data = bytes(word)
    if len(data) in _SWAPPABLE_SIZES:
        return data[::-1]
    return data