#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

"""The scanning loop and the functions most callers use.

  >>> a, b = Ref(int), Ref(str)
  >>> scan('42 apples', '{} {}', a, b)
  result(2)
  >>> a.value, b.value
  (42, 'apples')
"""

from .arguments import ArgMap, Ref, make_args
from .common import dbg, printable_char
from .context import make_context
from .options import Options
from .result import Error, ErrorCode, Result
from .stream import make_stream, skip_whitespace


class ScanResult(Result):
  """Number of values scanned, or the error that stopped the scan.

  Also keeps the stream, so the unread input is available afterwards.
  """
  __slots__ = 'stream', 'scanned'

  def __init__(self, stream, scanned, error=None):
    super(ScanResult, self).__init__(scanned, error)
    self.stream = stream
    self.scanned = scanned

  def remaining(self):
    return self.stream.remaining()


def _trace(ctx, message, depth=0):
  if ctx.options.explain:
    dbg(message, depth)


def resolve_arg(ctx, arg_id, argmap):
  if not arg_id:
    return ctx.next_arg()
  if all(ctx.locale.is_digit(ch) for ch in arg_id):
    return ctx.arg(int(arg_id))
  found = ctx.arg(arg_id)
  if not found or found.value:
    return found
  if argmap is not None:
    found = argmap.find(arg_id)
    if not found or found.value:
      return found
  return Result.fail(
      ErrorCode.INVALID_ARGUMENT, 'No argument named "%s"' % arg_id)


def scan_literal(ctx):
  cursor, stream = ctx.cursor, ctx.stream
  ch = stream.read_char()
  if not ch:
    return ch.error
  if not cursor.check_literal(ch.value):
    stream.putback(ch.value)
    return Error(
        ErrorCode.INVALID_SCANNED_VALUE,
        'Expected %s from the format string, got %s' % (
            printable_char(cursor.next()), printable_char(ch.value)))
  cursor.advance()
  return Error.good()


def scan_argument(ctx, argmap):
  cursor, locale = ctx.cursor, ctx.locale
  if not cursor.check_arg_begin(locale):
    return Error(ErrorCode.INVALID_FORMAT_STRING,
                 'Expected the start of an argument')
  cursor.arg_begin()
  if not cursor:
    return Error(ErrorCode.INVALID_FORMAT_STRING,
                 'Unexpected end of format string')

  arg_id = cursor.parse_arg_id(locale)
  if not arg_id:
    return arg_id.error
  arg = resolve_arg(ctx, arg_id.value, argmap)
  if not arg:
    return arg.error
  if not arg.value:
    return Error(ErrorCode.INVALID_ARGUMENT,
                 'Too few arguments for the format string')
  _trace(ctx, 'argument %s -> %s' % (repr(arg_id.value), repr(arg.value)), 1)

  scanner = arg.value.scanner()
  if not scanner:
    return scanner.error
  e = cursor.parse(scanner.value, ctx)
  if not e:
    return e
  if not cursor.check_arg_end(locale):
    return Error(ErrorCode.INVALID_FORMAT_STRING, 'Unterminated argument')
  cursor.arg_end()

  e = scanner.value.scan(arg.value.ref, ctx)
  if not e:
    return e
  cursor.arg_handled()
  return Error.good()


def vscan(ctx, argmap=None):
  """Runs the scan described by ctx. Returns the number of values scanned.

  Stops at the first error; values scanned before it stay in their Refs.
  """
  cursor, locale = ctx.cursor, ctx.locale
  if argmap is None:
    built = ArgMap.build(ctx.args)
    if not built:
      return ScanResult(ctx.stream, 0, built.error)
    argmap = built.value

  scanned = 0
  while cursor:
    if cursor.should_skip_whitespace(locale):
      _trace(ctx, 'skip whitespace')
      e = skip_whitespace(ctx.stream, locale)
      if not e:
        return ScanResult(ctx.stream, scanned, e)
      continue

    if not cursor:
      break

    if cursor.should_read_literal(locale):
      _trace(ctx, 'literal %s' % printable_char(cursor.next()))
      e = scan_literal(ctx)
    else:
      _trace(ctx, 'argument at %s' % repr(cursor))
      e = scan_argument(ctx, argmap)
      if e:
        scanned += 1

    if not e:
      _trace(ctx, 'stopped: %s' % e)
      return ScanResult(ctx.stream, scanned, e)

  return ScanResult(ctx.stream, scanned)


def _scan(source, fmt, targets, options, style):
  stream = make_stream(source)
  ctx = make_context(stream, fmt, make_args(*targets), options, style)
  return vscan(ctx)


def scan(source, fmt, *targets, options=None):
  """Scans with a "{}" format string."""
  return _scan(source, fmt, targets, options, 'brace')


def scanf(source, fmt, *targets, options=None):
  """Scans with a scanf-style "%d" format string."""
  return _scan(source, fmt, targets, options, 'percent')


def scan_default(source, *targets, options=None):
  """Scans one value per target, separated by whitespace."""
  return _scan(source, len(targets), targets, options, 'brace')


def scan_localized(locale, source, fmt, *targets, options=None):
  options = options.copy() if options is not None else Options()
  options.locale = locale
  return _scan(source, fmt, targets, options, 'brace')


def _check_delimiter(until):
  if not isinstance(until, str) or len(until) != 1:
    raise ValueError(
        'The delimiter must be a single character, not %s' % repr(until))


def getline(source, ref, until='\n'):
  """Reads everything up to `until` into ref; the delimiter is consumed."""
  if not isinstance(ref, Ref):
    raise TypeError('getline() reads into a Ref, not %s' % type(ref).__name__)
  _check_delimiter(until)
  stream = make_stream(source)
  chars = []
  while True:
    ch = stream.read_char()
    if not ch:
      if ch.error == ErrorCode.END_OF_STREAM and chars:
        break
      return ScanResult(stream, 0, ch.error)
    if ch.value == until:
      break
    chars.append(ch.value)
  ref.value = ''.join(chars)
  return ScanResult(stream, 1)


def ignore_until(source, until):
  """Skips input up to and including `until`, or to the end of input."""
  _check_delimiter(until)
  stream = make_stream(source)
  while True:
    ch = stream.read_char()
    if not ch:
      if ch.error == ErrorCode.END_OF_STREAM:
        return ScanResult(stream, 0)
      return ScanResult(stream, 0, ch.error)
    if ch.value == until:
      return ScanResult(stream, 0)
