import io
import math
import struct

import pytest

from cubestats.utils import (
    auto_tick,
    is_little_endian,
    swap_byte_order,
    trim_string,
    write_eps_footer,
    write_eps_header,
)


def test_trim_string_removes_surrounding_whitespace():
    assert trim_string(" \t hello world \n\r") == "hello world"


def test_trim_string_all_whitespace_gives_empty():
    assert trim_string(" \t\n\v\f\r ") == ""


def test_trim_string_keeps_inner_whitespace():
    assert trim_string("a  b") == "a  b"


def test_auto_tick_exact_multiple():
    assert auto_tick(10.0, 5) == pytest.approx(2.0)


def test_auto_tick_rounds_to_nearest_nice_value():
    assert auto_tick(100.0, 4) == pytest.approx(20.0)


@pytest.mark.parametrize("span,n", [(7.3, 3), (0.042, 5), (12345.0, 6), (1.0, 4)])
def test_auto_tick_is_nice_number(span, n):
    tick = auto_tick(span, n)
    exponent = math.floor(math.log10(tick))
    mantissa = tick / 10.0 ** exponent
    assert any(math.isclose(mantissa, m) for m in (1.0, 2.0, 5.0, 10.0))


@pytest.mark.parametrize("span,n", [(7.3, 3), (250.0, 5)])
def test_auto_tick_ignores_sign(span, n):
    assert auto_tick(-span, n) == auto_tick(span, n)


def test_auto_tick_zero_span():
    assert auto_tick(0.0, 5) == 0.0


def test_auto_tick_rejects_zero_ticks():
    with pytest.raises(ValueError):
        auto_tick(10.0, 0)


def test_eps_header_contents():
    buffer = io.StringIO()
    write_eps_header(buffer, "Plot", "cubestats", "0 0 100 200")
    lines = buffer.getvalue().splitlines()
    assert lines[0] == "%!PS-Adobe-3.0 EPSF-3.0"
    assert lines[1] == "%%Title: Plot"
    assert lines[2] == "%%Creator: cubestats"
    assert lines[3] == "%%BoundingBox: 0 0 100 200"
    assert lines[4] == "%%EndComments"
    assert "/m {moveto} bind def" in lines
    assert lines[-1].startswith("/ellipse {gsave")
    assert buffer.getvalue().endswith("\n")


def test_eps_footer():
    buffer = io.StringIO()
    write_eps_footer(buffer)
    assert buffer.getvalue() == "showpage\n%%EndDocument\n"


def test_is_little_endian_matches_native_packing():
    assert is_little_endian() == (struct.pack("=I", 1)[0] == 1)


def test_swap_two_bytes():
    assert swap_byte_order(b"\x01\x02") == b"\x02\x01"


def test_swap_matches_struct_byte_orders():
    little = struct.pack("<d", 1.5)
    assert swap_byte_order(little) == struct.pack(">d", 1.5)


@pytest.mark.parametrize("word", [b"\x01\x02", b"\x01\x02\x03\x04", bytearray(range(8))])
def test_swap_twice_round_trips(word):
    assert swap_byte_order(swap_byte_order(word)) == bytes(word)


def test_swap_unsupported_size_unchanged():
    assert swap_byte_order(b"\x01\x02\x03") == b"\x01\x02\x03"