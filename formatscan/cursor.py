#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

"""Format cursors: the state machines that walk a format source.

Three variants share one contract so the scanning loop never needs to know
which mini-language it is driving:

  BraceCursor       "{}" templates: {}, {0}, {name}, {:x}, {{ and }}
  PercentCursor     scanf templates: %d, %s, %%
  PositionalCursor  no template at all, just a number of arguments

Every cursor answers the same questions (is there more to read, is this
whitespace, literal text or a directive, where does the directive end) and
exposes the same hooks around a directive (arg_begin, arg_end, arg_handled).
"""

import copy
import enum

from .result import Error, ErrorCode, Result, expect


class IndexingMode(enum.Enum):
  UNSET = 'unset'
  IMPLICIT = 'implicit'
  EXPLICIT_LOCKED = 'explicit'


class ArgIdTracker(object):
  """Commits a parse to either implicit ({}) or explicit ({0}) indexing."""
  __slots__ = 'mode', 'next_index'

  def __init__(self):
    self.mode = IndexingMode.UNSET
    self.next_index = 0

  def next_arg_id(self):
    if self.mode is IndexingMode.EXPLICIT_LOCKED:
      return Result.fail(
          ErrorCode.INVALID_ARGUMENT,
          'Cannot switch from manual to automatic argument indexing')
    self.mode = IndexingMode.IMPLICIT
    arg_id = self.next_index
    self.next_index += 1
    return Result.ok(arg_id)

  def check_arg_id(self, arg_id):
    if self.mode is IndexingMode.IMPLICIT:
      return False
    self.mode = IndexingMode.EXPLICIT_LOCKED
    return True

  def __repr__(self):
    if self.mode is IndexingMode.IMPLICIT:
      return 'ids(implicit, next=%d)' % self.next_index
    return 'ids(%s)' % self.mode.value


def unexpected_end(what='format argument'):
  return Result.fail(
      ErrorCode.INVALID_FORMAT_STRING, 'Unexpected end of %s' % what)


class BraceCursor(object):
  __slots__ = '_fmt', '_pos', '_closed', 'ids'

  def __init__(self, fmt):
    self._fmt = fmt
    self._pos = 0
    # Set once the closing brace of the current directive has been consumed.
    self._closed = False
    self.ids = ArgIdTracker()

  def good(self):
    return self._pos < len(self._fmt)

  def __bool__(self):
    return self.good()

  def advance(self, n=1):
    expect(self.good(), 'advance() past the end of the format string')
    expect(self._pos + n <= len(self._fmt),
           'advance() by more than what is left of the format string')
    self._pos += n

  def next(self):
    expect(self.good(), 'next() past the end of the format string')
    return self._fmt[self._pos]

  def view(self):
    return self._fmt[self._pos:]

  def _peek(self, offset):
    i = self._pos + offset
    return self._fmt[i] if i < len(self._fmt) else None

  def should_skip_whitespace(self, locale):
    skip = False
    while self.good() and locale.is_space(self.next()):
      skip = True
      self.advance()
    return skip

  def should_read_literal(self, locale):
    ch = self.next()
    if ch == '{':
      if self._peek(1) == '{':
        self.advance()
        return True
      return False
    if ch == '}' and self._peek(1) == '}':
      self.advance()
    return True

  def check_literal(self, ch):
    return ch == self.next()

  def check_arg_begin(self, locale):
    return self.good() and self.next() == '{'

  def check_arg_end(self, locale):
    return self._closed or (self.good() and self.next() == '}')

  def arg_begin(self):
    pass

  def arg_end(self):
    pass

  def arg_handled(self):
    self._closed = False

  def parse_arg_id(self, locale):
    """Reads the id or name between '{' and '}' or ':'.

    With no sub-spec the closing brace is consumed too; with one, the cursor
    is left just past the ':' for the scanner to read its flags.
    """
    expect(self.good(), 'parse_arg_id() at the end of the format string')
    self._closed = False
    if self.next() == '{':
      self.advance()
    if not self.good():
      return unexpected_end()
    start = self._pos
    while self.good():
      ch = self.next()
      if ch == '}':
        arg_id = self._fmt[start:self._pos]
        self.advance()
        self._closed = True
        return Result.ok(arg_id)
      if ch == ':':
        arg_id = self._fmt[start:self._pos]
        self.advance()
        return Result.ok(arg_id)
      self.advance()
    return unexpected_end()

  def parse(self, scanner, ctx):
    if self._closed:
      return Error.good()
    e = scanner.parse(ctx)
    if not e:
      return e
    if self.good() and self.next() == '}':
      self.advance()
      self._closed = True
    return Error.good()

  def next_arg_id(self):
    return self.ids.next_arg_id()

  def check_arg_id(self, arg_id):
    return self.ids.check_arg_id(arg_id)

  def clone(self):
    dup = copy.copy(self)
    dup.ids = copy.copy(self.ids)
    return dup

  def __repr__(self):
    return 'brace(%s)' % repr(self.view())


class PercentCursor(object):
  __slots__ = '_fmt', '_pos', '_retreated', 'ids'

  def __init__(self, fmt):
    self._fmt = fmt
    self._pos = 0
    self._retreated = False
    self.ids = ArgIdTracker()

  def good(self):
    return self._pos < len(self._fmt)

  def __bool__(self):
    return self.good()

  def advance(self, n=1):
    expect(self.good(), 'advance() past the end of the format string')
    expect(self._pos + n <= len(self._fmt),
           'advance() by more than what is left of the format string')
    self._pos += n

  def _backward(self, n=1):
    expect(self._pos >= n, 'cannot step back before the format string start')
    self._pos -= n

  def next(self):
    expect(self.good(), 'next() past the end of the format string')
    return self._fmt[self._pos]

  def view(self):
    return self._fmt[self._pos:]

  def should_skip_whitespace(self, locale):
    skip = False
    while self.good() and locale.is_space(self.next()):
      skip = True
      self.advance()
    return skip

  def should_read_literal(self, locale):
    if self.next() != '%':
      return True
    if self._pos + 1 < len(self._fmt) and self._fmt[self._pos + 1] == '%':
      self.advance()
      return True
    return False

  def check_literal(self, ch):
    return ch == self.next()

  def check_arg_begin(self, locale):
    return self.good() and self.next() == '%'

  def check_arg_end(self, locale):
    return (not self.good() or self.check_arg_begin(locale)
            or locale.is_space(self.next()))

  def arg_begin(self):
    self.advance()

  def arg_end(self):
    # check_arg_end() only knows the directive is over once it sees the
    # character after it; step back onto the last character of the body.
    self._retreated = False
    if self.good():
      self._backward()
      self._retreated = True

  def arg_handled(self):
    if self._retreated:
      self._retreated = False
      self.advance()

  def parse_arg_id(self, locale):
    expect(self.good(), 'parse_arg_id() at the end of the format string')
    return Result.ok('')

  def parse(self, scanner, ctx):
    return scanner.parse(ctx)

  def next_arg_id(self):
    return self.ids.next_arg_id()

  def check_arg_id(self, arg_id):
    return self.ids.check_arg_id(arg_id)

  def clone(self):
    dup = copy.copy(self)
    dup.ids = copy.copy(self.ids)
    return dup

  def __repr__(self):
    return 'percent(%s)' % repr(self.view())


class PositionalCursor(object):
  __slots__ = '_args_left', '_should_skip_ws', 'ids'

  def __init__(self, args):
    self._args_left = args
    self._should_skip_ws = False
    self.ids = ArgIdTracker()

  @property
  def args_left(self):
    return self._args_left

  def good(self):
    return self._args_left > 0

  def __bool__(self):
    return self.good()

  def advance(self, n=1):
    pass

  def next(self):
    expect(False, 'A positional cursor has no format characters to read')

  def view(self):
    return ''

  def should_skip_whitespace(self, locale):
    if self._should_skip_ws:
      self._should_skip_ws = False
      return True
    return False

  def should_read_literal(self, locale):
    return False

  def check_literal(self, ch):
    return False

  def check_arg_begin(self, locale):
    return True

  def check_arg_end(self, locale):
    return True

  def arg_begin(self):
    pass

  def arg_end(self):
    pass

  def arg_handled(self):
    self._should_skip_ws = True
    self._args_left -= 1

  def parse_arg_id(self, locale):
    expect(self.good(), 'parse_arg_id() with no arguments left')
    return Result.ok('')

  def parse(self, scanner, ctx):
    # Nothing to parse: every scanner runs with its defaults.
    return Error.good()

  def next_arg_id(self):
    return self.ids.next_arg_id()

  def check_arg_id(self, arg_id):
    return self.ids.check_arg_id(arg_id)

  def clone(self):
    dup = copy.copy(self)
    dup.ids = copy.copy(self.ids)
    return dup

  def __repr__(self):
    return 'positional(%d left)' % self._args_left


cursor_styles = {
    'brace': BraceCursor,
    'percent': PercentCursor,
}


def make_cursor(source, style='brace'):
  if isinstance(source, int):
    return PositionalCursor(source)
  try:
    return cursor_styles[style](source)
  except KeyError:
    raise ValueError('Unknown format style "%s"' % style) from None
