#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

from .common import printable_char
from .options import Method
from .result import Error, ErrorCode, Result


class Char(str):
  """Scan target type for exactly one character."""
  __slots__ = ()


_scanner_registry = {}


def register_scanner(*types):
  def register(scanner_class):
    for t in types:
      _scanner_registry[t] = scanner_class
    return scanner_class
  return register


def scanner_for(t):
  for klass in getattr(t, '__mro__', (t,)):
    if klass in _scanner_registry:
      return Result.ok(_scanner_registry[klass]())
  return Result.fail(
      ErrorCode.INVALID_ARGUMENT,
      'No scanner registered for type %s' % getattr(t, '__name__', repr(t)))


def invalid_value(message):
  return Error(ErrorCode.INVALID_SCANNED_VALUE, message)


def read_while(stream, predicate):
  """Reads characters while predicate(ch) holds.

  The first character that fails the predicate is put back. Returns the
  characters read, or the error if the stream failed for any reason other
  than running out.
  """
  chars = []
  while True:
    ch = stream.read_char()
    if not ch:
      if ch.error == ErrorCode.END_OF_STREAM:
        return Result.ok(''.join(chars))
      return Result.from_error(ch.error)
    if not predicate(ch.value):
      e = stream.putback(ch.value)
      if not e:
        return Result.from_error(e)
      return Result.ok(''.join(chars))
    chars.append(ch.value)


def put_back(stream, text):
  for ch in reversed(text):
    e = stream.putback(ch)
    if not e:
      return e
  return Error.good()


class Scanner(object):
  """Base for per-type scanners.

  parse() reads the directive's flags off the cursor until the cursor reports
  the end of the directive. scan() reads from the stream into a Ref.
  """
  flags = ''

  def parse(self, ctx):
    cursor, locale = ctx.cursor, ctx.locale
    while cursor and not cursor.check_arg_end(locale):
      ch = cursor.next()
      if ch not in self.flags:
        return Error(
            ErrorCode.INVALID_FORMAT_STRING,
            'Unexpected format specifier %s for %s' % (
                printable_char(ch), type(self).__name__))
      e = self.on_flag(ch, ctx)
      if not e:
        return e
      cursor.advance()
    return Error.good()

  def on_flag(self, ch, ctx):
    return Error.good()

  def scan(self, ref, ctx):
    raise NotImplementedError(type(self).__name__ + '.scan')


_base_flags = {
    'd': 10,
    'u': 10,
    'i': 0,
    'x': 16,
    'X': 16,
    'o': 8,
    'b': 2,
}

_base_prefixes = {
    'x': 16,
    'o': 8,
    'b': 2,
}


def _is_digit_of(base):
  if base <= 10:
    return lambda ch: '0' <= ch < chr(ord('0') + base)
  limit = chr(ord('a') + base - 10)
  return lambda ch: '0' <= ch <= '9' or 'a' <= ch.lower() < limit


@register_scanner(int)
class IntegerScanner(Scanner):
  flags = ''.join(_base_flags) + "n'"

  def __init__(self):
    self.base = 10
    self.base_set = False
    self.thousands = False

  def on_flag(self, ch, ctx):
    if ch in _base_flags:
      if self.base_set:
        return Error(ErrorCode.INVALID_FORMAT_STRING,
                     'More than one base given for an integer')
      self.base = _base_flags[ch]
      self.base_set = True
    elif ch in "'n":
      # Digit grouping with the locale's thousands separator.
      self.thousands = True
    return Error.good()

  def scan(self, ref, ctx):
    stream = ctx.stream
    sign = read_sign(stream)
    if not sign:
      return sign.error

    prefix = self._read_prefix(stream, self.base)
    if not prefix:
      return prefix.error
    base, raw = prefix.value

    separator = ctx.locale.thousands_separator if self.thousands else None
    is_digit = _is_digit_of(base)
    digits = read_while(
        stream, lambda ch: is_digit(ch) or ch == separator)
    if not digits:
      return digits.error
    text = digits.value
    if raw == '0':
      text = '0' + text
    if separator:
      text = text.replace(separator, '')

    if not text:
      put_back(stream, sign.value + raw + digits.value)
      return invalid_value('Expected an integer')

    if ctx.int_method is Method.CUSTOM:
      value = 0
      for digit in text:
        value = value * base + int(digit, 36)
    else:
      value = int(text, base)
    ref.value = -value if sign.value == '-' else value
    return Error.good()

  def _read_prefix(self, stream, base):
    """Consumes a 0x/0o/0b prefix where the base allows one.

    Returns (base, raw) with the raw text consumed: '', '0' or the prefix.
    A base of 0 means "detect", which also treats a bare leading 0 as octal.
    """
    ch = stream.read_char()
    if not ch:
      if ch.error == ErrorCode.END_OF_STREAM:
        return Result.ok((base or 10, ''))
      return ch
    if ch.value != '0':
      e = stream.putback(ch.value)
      return Result.ok((base or 10, '')) if e else Result.from_error(e)

    marker = stream.read_char()
    if not marker:
      if marker.error == ErrorCode.END_OF_STREAM:
        return Result.ok((base or 10, '0'))
      return marker
    prefixed = _base_prefixes.get(marker.value.lower())
    if prefixed is not None and base in (0, prefixed):
      after = stream.read_char()
      if after and _is_digit_of(prefixed)(after.value):
        stream.putback(after.value)
        return Result.ok((prefixed, '0' + marker.value))
      if after:
        stream.putback(after.value)
      elif after.error != ErrorCode.END_OF_STREAM:
        return after
      # A prefix with no digits after it: only the 0 is part of the number.
    e = stream.putback(marker.value)
    if not e:
      return Result.from_error(e)
    return Result.ok((8 if base == 0 else base, '0'))


def read_sign(stream):
  """Consumes an optional '+' or '-'. Running out of input is an error."""
  ch = stream.read_char()
  if not ch:
    return ch
  if ch.value in '+-':
    return ch
  e = stream.putback(ch.value)
  return Result.ok('') if e else Result.from_error(e)


def read_digits(stream):
  return read_while(stream, lambda ch: '0' <= ch <= '9')


@register_scanner(float)
class FloatScanner(Scanner):
  flags = 'fFeEgGaAn'

  def __init__(self):
    self.localized = False

  def on_flag(self, ch, ctx):
    if ch == 'n':
      self.localized = True
    return Error.good()

  def _read_special(self, stream):
    # inf, infinity and nan, in any case
    for word in ('infinity', 'inf', 'nan'):
      read = []
      for expected in word:
        ch = stream.read_char()
        if not ch:
          break
        read.append(ch.value)
        if ch.value.lower() != expected:
          break
      else:
        return ''.join(read)
      put_back(stream, ''.join(read))
    return ''

  def _read_exponent(self, stream):
    marker = stream.read_char()
    if not marker:
      return Result.ok('')
    if marker.value not in 'eE':
      stream.putback(marker.value)
      return Result.ok('')
    exp_sign = stream.read_char()
    sign = ''
    if exp_sign and exp_sign.value in '+-':
      sign = exp_sign.value
    elif exp_sign:
      stream.putback(exp_sign.value)
    digits = read_digits(stream)
    if not digits:
      return digits
    if not digits.value:
      # Not an exponent after all; leave it for whatever reads next.
      put_back(stream, marker.value + sign)
      return Result.ok('')
    return Result.ok('e' + sign + digits.value)

  def scan(self, ref, ctx):
    stream = ctx.stream
    point = ctx.locale.decimal_point if self.localized else '.'

    sign = read_sign(stream)
    if not sign:
      return sign.error

    special = self._read_special(stream)
    if special:
      ref.value = float(sign.value + special)
      return Error.good()

    whole = read_digits(stream)
    if not whole:
      return whole.error

    fraction, has_point = '', False
    ch = stream.read_char()
    if ch and ch.value == point:
      has_point = True
      digits = read_digits(stream)
      if not digits:
        return digits.error
      fraction = digits.value
    elif ch:
      stream.putback(ch.value)

    if not whole.value and not fraction:
      put_back(stream, sign.value + (point if has_point else ''))
      return invalid_value('Expected a floating-point number')

    exponent = self._read_exponent(stream)
    if not exponent:
      return exponent.error

    ref.value = float(sign.value + (whole.value or '0') + '.' + (fraction or '0')
                      + exponent.value)
    return Error.good()


@register_scanner(str)
class StringScanner(Scanner):
  flags = 's'

  def scan(self, ref, ctx):
    stream, locale = ctx.stream, ctx.locale
    first = stream.read_char()
    if not first:
      return first.error
    if locale.is_space(first.value):
      stream.putback(first.value)
      return invalid_value('Expected a non-empty word')
    rest = read_while(stream, lambda ch: not locale.is_space(ch))
    if not rest:
      return rest.error
    ref.value = first.value + rest.value
    return Error.good()


@register_scanner(Char)
class CharScanner(Scanner):
  flags = 'c'

  def scan(self, ref, ctx):
    ch = ctx.stream.read_char()
    if not ch:
      return ch.error
    ref.value = Char(ch.value)
    return Error.good()


@register_scanner(bool)
class BoolScanner(Scanner):
  flags = 'anl'

  def __init__(self):
    self.alpha = False
    self.numeric = False
    self.localized = False

  def on_flag(self, ch, ctx):
    if ch == 'a':
      self.alpha = True
    elif ch == 'n':
      self.numeric = True
    elif ch == 'l':
      self.localized = True
      self.alpha = True
    return Error.good()

  def scan(self, ref, ctx):
    stream = ctx.stream
    alpha, numeric = self.alpha, self.numeric
    if not alpha and not numeric:
      alpha = numeric = True

    first = stream.read_char()
    if not first:
      return first.error
    if numeric and first.value in '01':
      ref.value = first.value == '1'
      return Error.good()

    if alpha:
      if self.localized:
        names = {ctx.locale.truename: True, ctx.locale.falsename: False}
      else:
        names = {'true': True, 'false': False}
      read = first.value
      while True:
        candidates = [n for n in names if n.startswith(read)]
        if not candidates:
          break
        if read in names:
          ref.value = names[read]
          return Error.good()
        ch = stream.read_char()
        if not ch:
          if ch.error != ErrorCode.END_OF_STREAM:
            return ch.error
          break
        read += ch.value
      put_back(stream, read)
      return invalid_value('Expected a boolean, got %s' % printable_char(read))

    stream.putback(first.value)
    return invalid_value('Expected 0 or 1, got %s' % printable_char(first.value))
