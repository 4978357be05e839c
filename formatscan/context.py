#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

from .arguments import Arg, Args, make_args
from .cursor import make_cursor
from .options import Options
from .result import ErrorCode, Result, expect


class Context(object):
  """Everything one scan call works with.

  The stream is borrowed for the lifetime of the call, the cursor and the
  options belong to the context, the locale is a cheap view.
  """
  __slots__ = '_stream', '_cursor', '_locale', '_options', '_args'

  def __init__(self, stream, cursor, args, options=None):
    self._stream = stream
    self._cursor = cursor
    self._options = options.copy() if options is not None else Options()
    self._locale = self._options.get_locale_ref()
    self._args = args

  @property
  def stream(self):
    expect(self._stream is not None, 'Context has no stream')
    return self._stream

  @property
  def cursor(self):
    return self._cursor

  parse_context = cursor

  @property
  def locale(self):
    return self._locale

  @property
  def options(self):
    return self._options

  @property
  def args(self):
    return self._args

  @property
  def int_method(self):
    return self._options.int_method

  @property
  def float_method(self):
    return self._options.float_method

  def next_arg(self):
    arg_id = self._cursor.next_arg_id()
    if not arg_id:
      return arg_id
    return self._get_arg(arg_id.value)

  def arg(self, arg_id):
    if isinstance(arg_id, str):
      # Names are resolved a layer up, against the named argument map.
      return Result.ok(Arg())
    if not self._cursor.check_arg_id(arg_id):
      return Result.fail(
          ErrorCode.INVALID_ARGUMENT,
          'Cannot switch from automatic to manual argument indexing')
    return self._get_arg(arg_id)

  def _get_arg(self, arg_id):
    a = self._args.get(arg_id)
    if not a and not self._args.check_id(arg_id - 1):
      return Result.fail(ErrorCode.INVALID_ARGUMENT, 'Argument id out of range')
    return Result.ok(a)

  def __repr__(self):
    return 'context(%s, %s, %s)' % (
        repr(self._stream), repr(self._cursor), repr(self._args))


def make_context(stream, source, args, options=None, style='brace'):
  """Builds a Context.

  source is a format string (read in the given style), an int for
  format-less positional scanning, or an already constructed cursor.
  """
  if isinstance(source, (str, int)):
    cursor = make_cursor(source, style)
  else:
    cursor = source
  if not isinstance(args, Args):
    args = make_args(*args)
  return Context(stream, cursor, args, options)


def context_with_args(ctx, args):
  if not isinstance(args, Args):
    args = make_args(*args)
  return Context(ctx.stream, ctx.cursor.clone(), args, ctx.options)
