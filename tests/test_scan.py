#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

from formatscan import scan as scanning
from formatscan.arguments import Ref, arg
from formatscan.localeref import LocaleRef
from formatscan.options import Method, Options
from formatscan.result import Error, ErrorCode, Result, ScanError
from formatscan.scanners import Char, IntegerScanner, Scanner, register_scanner
from formatscan.stream import BytesStream, StringStream, make_stream

import math
import pytest


class Point(object):
  def __init__(self, x, y):
    self.x = x
    self.y = y


@register_scanner(Point)
class PointScanner(Scanner):
  """Reads "x,y"."""

  def scan(self, ref, ctx):
    x, y = Ref(int), Ref(int)
    e = IntegerScanner().scan(x, ctx)
    if not e:
      return e
    comma = ctx.stream.read_char()
    if not comma:
      return comma.error
    if comma.value != ',':
      return Error(ErrorCode.INVALID_SCANNED_VALUE, 'Expected ","')
    e = IntegerScanner().scan(y, ctx)
    if not e:
      return e
    ref.value = Point(x.value, y.value)
    return Error.good()


def scan_one(text, fmt, t, **kwargs):
  ref = Ref(t)
  result = scanning.scan(text, fmt, ref, **kwargs)
  return result, ref.value


@pytest.mark.known
class TestScan_KnownValues:
  @pytest.mark.parametrize('text,fmt,t,expected', [
    pytest.param('42', '{}', int, 42, id='int'),
    pytest.param('-17', '{}', int, -17, id='negative'),
    pytest.param('+5', '{}', int, 5, id='plus'),
    pytest.param('ff', '{:x}', int, 255, id='hex'),
    pytest.param('0x1f', '{:x}', int, 31, id='hex-prefix'),
    pytest.param('777', '{:o}', int, 511, id='octal'),
    pytest.param('101', '{:b}', int, 5, id='binary'),
    pytest.param('010', '{:i}', int, 8, id='detect-octal'),
    pytest.param('0b101', '{:i}', int, 5, id='detect-binary'),
    pytest.param('0x10', '{:i}', int, 16, id='detect-hex'),
    pytest.param('0', '{:i}', int, 0, id='detect-zero'),
    pytest.param("1,234,567", "{:'}", int, 1234567, id='grouped'),
    pytest.param('3.25', '{}', float, 3.25, id='float'),
    pytest.param('-1e3', '{}', float, -1000.0, id='exponent'),
    pytest.param('2.5E-1', '{:e}', float, 0.25, id='negative-exponent'),
    pytest.param('.5', '{}', float, 0.5, id='leading-point'),
    pytest.param('7.', '{}', float, 7.0, id='trailing-point'),
    pytest.param('inf', '{}', float, float('inf'), id='inf'),
    pytest.param('-Infinity', '{}', float, float('-inf'), id='infinity'),
    pytest.param('hello', '{}', str, 'hello', id='word'),
    pytest.param('x', '{}', Char, 'x', id='char'),
    pytest.param('true', '{}', bool, True, id='bool-true'),
    pytest.param('false', '{}', bool, False, id='bool-false'),
    pytest.param('1', '{}', bool, True, id='bool-one'),
    pytest.param('0', '{:n}', bool, False, id='bool-numeric'),
  ])
  def test_single_value(self, text, fmt, t, expected):
    result, value = scan_one(text, fmt, t)
    assert result
    assert result.value == 1
    assert value == expected

  def test_nan(self):
    result, value = scan_one('nan', '{}', float)
    assert result
    assert math.isnan(value)

  def test_two_values(self):
    a, b = Ref(int), Ref(str)
    result = scanning.scan('42 apples', '{} {}', a, b)
    assert result.value == 2
    assert (a.value, b.value) == (42, 'apples')
    assert result.remaining() == ''

  def test_remaining_input(self):
    a = Ref(int)
    result = scanning.scan('12 34', '{}', a)
    assert a.value == 12
    assert result.remaining() == ' 34'

  def test_literals_between_values(self):
    h, m, s = Ref(int), Ref(int), Ref(int)
    assert scanning.scan('12:34:56', '{}:{}:{}', h, m, s)
    assert (h.value, m.value, s.value) == (12, 34, 56)

  def test_escaped_braces(self):
    a = Ref(int)
    assert scanning.scan('{7}', '{{{}}}', a)
    assert a.value == 7

  def test_explicit_ids(self):
    a, b = Ref(int), Ref(int)
    assert scanning.scan('1 2', '{1} {0}', a, b)
    assert (a.value, b.value) == (2, 1)

  def test_named_arguments(self):
    width, height = Ref(int), Ref(int)
    result = scanning.scan(
        'w=640 h=480', 'w={width} h={height}',
        arg('height', height), arg('width', width))
    assert result.value == 2
    assert (width.value, height.value) == (640, 480)

  def test_named_argument_with_spec(self):
    mask = Ref(int)
    assert scanning.scan('ff', '{mask:x}', arg('mask', mask))
    assert mask.value == 255

  def test_adjacent_chars(self):
    a, b = Ref(Char), Ref(Char)
    assert scanning.scan('ab', '{}{}', a, b)
    assert (a.value, b.value) == ('a', 'b')

  def test_format_whitespace_matches_any_amount(self):
    a, b = Ref(int), Ref(int)
    assert scanning.scan('1 \t\n 2', '{} {}', a, b)
    assert (a.value, b.value) == (1, 2)

  def test_bytes_input(self):
    a, b = Ref(int), Ref(int)
    assert scanning.scan(b'12 34', '{} {}', a, b)
    assert (a.value, b.value) == (12, 34)

  def test_custom_scanner(self):
    p = Ref(Point)
    assert scanning.scan('at 3,-4', 'at {}', p)
    assert (p.value.x, p.value.y) == (3, -4)

  def test_custom_int_method(self):
    result, value = scan_one(
        'ff', '{:x}', int, options=Options(int_method=Method.CUSTOM))
    assert result
    assert value == 255

  def test_localized_float(self):
    locale = LocaleRef(decimal_point=',')
    f = Ref(float)
    assert scanning.scan_localized(locale, '3,5', '{:n}', f)
    assert f.value == 3.5

  def test_localized_bool(self):
    locale = LocaleRef(truename='ja', falsename='nein')
    b = Ref(bool)
    assert scanning.scan_localized(locale, 'nein', '{:l}', b)
    assert b.value is False


class TestScan_Errors:
  @pytest.mark.parametrize('text,fmt,t,code', [
    pytest.param('abc', '{}', int, ErrorCode.INVALID_SCANNED_VALUE,
                 id='not-an-int'),
    pytest.param('x', '{}', float, ErrorCode.INVALID_SCANNED_VALUE,
                 id='not-a-float'),
    pytest.param('maybe', '{}', bool, ErrorCode.INVALID_SCANNED_VALUE,
                 id='not-a-bool'),
    pytest.param('t', '{:n}', bool, ErrorCode.INVALID_SCANNED_VALUE,
                 id='numeric-bool'),
    pytest.param('', '{}', int, ErrorCode.END_OF_STREAM, id='empty-input'),
    pytest.param('1', '{:q}', int, ErrorCode.INVALID_FORMAT_STRING,
                 id='unknown-flag'),
    pytest.param('1', '{:xd}', int, ErrorCode.INVALID_FORMAT_STRING,
                 id='two-bases'),
    pytest.param('1', '{:d', int, ErrorCode.INVALID_FORMAT_STRING,
                 id='unterminated-spec'),
    pytest.param('1', '{abc', int, ErrorCode.INVALID_FORMAT_STRING,
                 id='unterminated-id'),
    pytest.param('1', '{nope}', int, ErrorCode.INVALID_ARGUMENT,
                 id='unknown-name'),
    pytest.param('1', '{5}', int, ErrorCode.INVALID_ARGUMENT,
                 id='id-out-of-range'),
    pytest.param('1', '{1}', int, ErrorCode.INVALID_ARGUMENT,
                 id='id-one-past-end'),
    pytest.param('1', '{}', complex, ErrorCode.INVALID_ARGUMENT,
                 id='no-scanner'),
  ])
  def test_single_value_errors(self, text, fmt, t, code):
    result, value = scan_one(text, fmt, t)
    assert not result
    assert result.error == code
    assert result.scanned == 0
    assert value is None

  @pytest.mark.parametrize('text,fmt,left', [
    pytest.param('0xg', '{:x}', 'xg', id='hex'),
    pytest.param('0x', '{:i}', 'x', id='detect-at-end'),
    pytest.param('0b2', '{:b}', 'b2', id='binary'),
  ])
  def test_prefix_without_digits_reads_the_zero(self, text, fmt, left):
    a = Ref(int)
    result = scanning.scan(text, fmt, a)
    assert result
    assert a.value == 0
    assert result.remaining() == left

  def test_failed_value_is_not_consumed(self):
    result, _ = scan_one('-x', '{}', int)
    assert not result
    assert result.remaining() == '-x'

  def test_literal_mismatch(self):
    a = Ref(int)
    result = scanning.scan('1;2', '{},{}', a, Ref(int))
    assert not result
    assert result.error == ErrorCode.INVALID_SCANNED_VALUE
    assert result.scanned == 1
    assert a.value == 1
    assert result.remaining() == ';2'

  def test_mixing_implicit_and_explicit_ids(self):
    a, b = Ref(int), Ref(int)
    result = scanning.scan('1 2', '{} {0}', a, b)
    assert not result
    assert result.error == ErrorCode.INVALID_ARGUMENT
    assert result.scanned == 1

  def test_mixing_explicit_and_implicit_ids(self):
    result = scanning.scan('1 2', '{0} {}', Ref(int), Ref(int))
    assert result.error == ErrorCode.INVALID_ARGUMENT

  def test_too_few_arguments(self):
    result = scanning.scan('1 2', '{} {}', Ref(int))
    assert result.error == ErrorCode.INVALID_ARGUMENT
    assert result.scanned == 1

  def test_duplicate_names(self):
    result = scanning.scan(
        '1', '{x}', arg('x', Ref(int)), arg('x', Ref(int)))
    assert result.error == ErrorCode.INVALID_ARGUMENT

  def test_unwrap_raises(self):
    result, _ = scan_one('abc', '{}', int)
    with pytest.raises(ScanError) as excinfo:
      result.unwrap()
    assert excinfo.value.code is ErrorCode.INVALID_SCANNED_VALUE

  def test_bad_source(self):
    with pytest.raises(TypeError):
      scanning.scan(42, '{}', Ref(int))


class TestScan_Scanf:
  def test_two_values(self):
    a, s = Ref(int), Ref(str)
    result = scanning.scanf('10 abc', '%d %s', a, s)
    assert result.value == 2
    assert (a.value, s.value) == (10, 'abc')

  def test_escaped_percent(self):
    a = Ref(int)
    assert scanning.scanf('100%', '%d%%', a)
    assert a.value == 100

  def test_adjacent_directives(self):
    a, b = Ref(Char), Ref(int)
    assert scanning.scanf('x12', '%c%d', a, b)
    assert (a.value, b.value) == ('x', 12)

  def test_hex(self):
    a = Ref(int)
    assert scanning.scanf('ff', '%x', a)
    assert a.value == 255

  def test_literal_prefix(self):
    a = Ref(float)
    assert scanning.scanf('t=2.5', 't=%f', a)
    assert a.value == 2.5

  def test_directive_body_runs_to_whitespace(self):
    result = scanning.scanf('1,2', '%d,%d', Ref(int), Ref(int))
    assert result.error == ErrorCode.INVALID_FORMAT_STRING

  def test_trailing_percent(self):
    result = scanning.scanf('abc', 'abc%', Ref(int))
    assert result.error == ErrorCode.INVALID_FORMAT_STRING


class TestScan_Positional:
  def test_whitespace_separated(self):
    a, f, s = Ref(int), Ref(float), Ref(str)
    result = scanning.scan_default('1   2.5\nword', a, f, s)
    assert result.value == 3
    assert (a.value, f.value, s.value) == (1, 2.5, 'word')

  def test_no_whitespace_skipped_before_the_first(self):
    result = scanning.scan_default(' 1', Ref(int))
    assert result.error == ErrorCode.INVALID_SCANNED_VALUE

  def test_nothing_to_scan(self):
    result = scanning.scan_default('anything')
    assert result
    assert result.value == 0
    assert result.remaining() == 'anything'

  def test_named_arguments_scan_in_order(self):
    a = Ref(int)
    assert scanning.scan_default('9', arg('a', a))
    assert a.value == 9


class TestScan_Lines:
  def test_getline(self):
    line = Ref(str)
    result = scanning.getline('first line\nsecond', line)
    assert result
    assert line.value == 'first line'
    assert result.remaining() == 'second'

  def test_getline_without_delimiter(self):
    line = Ref(str)
    assert scanning.getline('only', line)
    assert line.value == 'only'

  def test_getline_empty_input(self):
    result = scanning.getline('', Ref(str))
    assert result.error == ErrorCode.END_OF_STREAM

  def test_getline_custom_delimiter(self):
    line = Ref(str)
    assert scanning.getline('a;b', line, ';')
    assert line.value == 'a'

  @pytest.mark.parametrize('until', ['', '\n\n', None])
  def test_delimiter_must_be_one_character(self, until):
    with pytest.raises(ValueError):
      scanning.getline('ab\n\ncd', Ref(str), until)
    with pytest.raises(ValueError):
      scanning.ignore_until('ab\n\ncd', until)

  def test_ignore_until(self):
    stream = StringStream('header: 42')
    assert scanning.ignore_until(stream, ':')
    a = Ref(int)
    assert scanning.scan(stream, ' {}', a)
    assert a.value == 42

  def test_ignore_until_missing(self):
    result = scanning.ignore_until('abc', ':')
    assert result
    assert result.remaining() == ''


class TestScan_Explain:
  def test_trace(self, capsys):
    a = Ref(int)
    assert scanning.scan('x 1', 'x {}', a, options=Options(explain=True))
    out = capsys.readouterr().out
    assert '[dbg] literal' in out
    assert '[dbg] skip whitespace' in out
    assert '[dbg] argument' in out

  def test_no_trace_by_default(self, capsys):
    assert scanning.scan('1', '{}', Ref(int))
    assert capsys.readouterr().out == ''


class TestStream:
  def test_read_and_putback(self):
    stream = StringStream('ab')
    assert stream.read_char().value == 'a'
    assert stream.putback('a')
    assert stream.chars_read == 0
    assert stream.remaining() == 'ab'

  def test_putback_must_match(self):
    stream = StringStream('ab')
    stream.read_char()
    assert stream.putback('z') == ErrorCode.INVALID_OPERATION
    assert StringStream('a').putback('a') == ErrorCode.INVALID_OPERATION

  def test_end_of_stream(self):
    result = StringStream('').read_char()
    assert not result
    assert result.error == ErrorCode.END_OF_STREAM

  def test_bytes_with_encoding(self):
    stream = BytesStream('héllo'.encode('utf-8'), 'utf-8')
    assert stream.remaining() == 'héllo'
    assert stream.encoding == 'utf-8'

  def test_bytes_detected_encoding(self):
    stream = BytesStream(b'plain ascii text')
    assert stream.remaining() == 'plain ascii text'
    assert stream.encoding

  def test_empty_bytes(self):
    assert BytesStream(b'').remaining() == ''

  @pytest.mark.parametrize('data,encoding', [
    pytest.param(b'\xff\xfe', 'ascii', id='undecodable'),
    pytest.param(b'abc', 'no-such-encoding', id='unknown-encoding'),
  ])
  def test_bad_bytes(self, data, encoding):
    with pytest.raises(ScanError) as excinfo:
      BytesStream(data, encoding)
    assert excinfo.value.code is ErrorCode.STREAM_SOURCE_ERROR

  def test_make_stream_passes_streams_through(self):
    stream = StringStream('')
    assert make_stream(stream) is stream


class TestResult:
  def test_good_error_is_truthy(self):
    assert Error()
    assert Error.good().is_recoverable()
    assert not Error(ErrorCode.INVALID_ARGUMENT, 'x')

  def test_unrecoverable(self):
    assert not Error(ErrorCode.UNRECOVERABLE_STREAM_ERROR).is_recoverable()

  def test_value_of_failed_result(self):
    result = Result.fail(ErrorCode.INVALID_ARGUMENT, 'nope')
    assert result.value_or(3) == 3
    with pytest.raises(AssertionError):
      result.value

  def test_ok(self):
    result = Result.ok(3)
    assert result.has_value()
    assert result.unwrap() == 3
    assert result.error

  def test_raise_for_error(self):
    Error().raise_for_error()
    with pytest.raises(ScanError):
      Error(ErrorCode.END_OF_STREAM).raise_for_error()

  def test_str(self):
    assert str(Error(ErrorCode.INVALID_ARGUMENT, 'bad id')) == (
        'invalid_argument: bad id')
