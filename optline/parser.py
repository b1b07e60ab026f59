r"""
Optline dispatcher: turn an argument vector into bound values.

Loop (left to right, one or more tokens per iteration)
- END ("--")      → every remaining token becomes the '--' tail, verbatim.
- LONG ("--name") → resolve the alias and run its action.
- SHORT ("-abc")  → peel the cluster one character at a time; a value-taking
                    character takes the remainder of the cluster as its value.
- FREE            → append to the positional buffer; with
                    break_on_first_positional the rest follows verbatim.

Values
- inline first ("--name=value", "-nvalue", "-n=value"), otherwise the next
  token whatever it looks like; nothing left is a MissingValueError.
- conversion with the action's 'type', then the 'choices' check.

Faults are collected, never raised: parse() returns an Outcome whose
diagnostics hold every ParseError in the order it was found. Only
SystemExit (and other BaseException) coming out of a callback propagates.
"""
import difflib
import logging
import shlex
import sys
from collections.abc import Iterable
from typing import NamedTuple

from .actions import Invoke
from .binder import bind
from .faults import *
from .scanner import Kind, Scanner
from .utils import *

logger = logging.getLogger(__name__)


class Outcome(NamedTuple):
    """
    Result of one parse: success flag and the collected parse errors.
    """
    success: bool
    diagnostics: tuple


class Context:
    """
    What an Invoke callback sees of the running parse.

    - store: the caller's mapping receiving bound values.
    - registry: the registry being parsed against.
    - option: the matched option descriptor.
    - alias: the alias as the user spelled it, with its dashes.
    - take(): consume the next raw token (Unset when none is left).
    - usage(): the usage renderer of the registry.
    """

    def __init__(self, parser, option, alias, /):
        self._parser = parser
        self._option = option
        self._alias = alias

    @property
    def store(self):
        return self._parser.store

    @property
    def registry(self):
        return self._parser.registry

    @property
    def option(self):
        return self._option

    @property
    def alias(self):
        return self._alias

    def take(self):
        return self._parser._scanner.take()

    def usage(self):
        return self._parser.registry.usage(colorful=self.store.get("colorful", Unset))


def _tokenize(argv, /):
    """
    Normalize the argv input: Unset → sys.argv[1:], str → shlex.split, else an
    iterable of strings.
    """
    if argv is Unset:
        return sys.argv[1:]
    if isinstance(argv, str):
        return shlex.split(argv)
    if isinstance(argv, Iterable):
        tokens = list(argv)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class Parser:
    """
    Single-use dispatcher bound to a registry and a store.

    Parameters
    - registry: optline.registry.Registry.
    - store: mutable mapping receiving the values (a new dict when None).
    """

    def __init__(self, registry, store=None, /):
        self._registry = registry
        self._store = {} if store is None else store
        self._scanner = Scanner(())
        self._faults = []
        self._entries = []
        self._tail = Unset

    @property
    def registry(self):
        return self._registry

    @property
    def store(self):
        return self._store

    def parse(self, argv=Unset, /):
        self._scanner = Scanner(_tokenize(argv))
        self._faults.clear()
        self._entries.clear()
        self._tail = Unset

        while self._scanner:
            lexeme = self._scanner.next()

            match lexeme.kind:
                case Kind.END:
                    self._tail = self._spill([])
                    logger.debug("end of options, %d token(s) left as they are", len(self._tail))
                case Kind.LONG:
                    self._dispatch_long(lexeme)
                case Kind.SHORT:
                    self._dispatch_short(lexeme)
                case Kind.FREE:
                    self._entries.append((lexeme.token, lexeme.index))
                    if self._registry.break_on_first_positional:
                        logger.debug("first positional %r, scanning stops", lexeme.token)
                        self._spill(self._entries)

        self._faults.extend(bind(self._registry.positionals, self._entries, self._tail, self._store))

        if self._faults:
            logger.debug("parse failed with %d fault(s)", len(self._faults))
        return Outcome(not self._faults, tuple(self._faults))

    def _spill(self, entries, /):
        start = self._scanner.index
        entries.extend((token, start + offset) for offset, token in enumerate(self._scanner.drain(), 1))
        return entries

    def _dispatch_long(self, lexeme, /):
        # a single character is a short alias, never a long one
        try:
            if len(lexeme.name) < 2:
                raise KeyError(lexeme.name)
            option = self._registry.aliases[lexeme.name]
        except KeyError:
            return self._unknown(lexeme, "--" + lexeme.name)
        self._apply(option, "--" + lexeme.name, lexeme, lexeme.value)

    def _dispatch_short(self, lexeme, /):
        cluster, inline = lexeme.name, lexeme.value
        if not cluster:
            return self._unknown(lexeme, lexeme.token)

        for position, character in enumerate(cluster):
            try:
                option = self._registry.aliases[character]
            except KeyError:
                # the rest of the cluster is dropped
                return self._unknown(lexeme, "-" + character)

            remainder = cluster[position + 1:]
            if option.takes_value:
                if not remainder:
                    value = inline
                elif inline is None:
                    value = remainder
                else:
                    value = remainder + "=" + inline
                return self._apply(option, "-" + character, lexeme, value)

            self._apply(option, "-" + character, lexeme, None if remainder else inline)

    def _unknown(self, lexeme, alias, /):
        if self._registry.break_on_unknown:
            logger.debug("unknown option %r, scanning stops", alias)
            self._entries.append((lexeme.token, lexeme.index))
            self._spill(self._entries)
            return

        suggestions = difflib.get_close_matches(alias, [
            spelling for option in self._registry.options for spelling in option.switches
        ], 5)
        try:
            hint = "did you mean %r? run '%s --help' to see all options" % (suggestions[0], self._registry.prog)
        except IndexError:
            hint = "run '%s --help' to see all options" % self._registry.prog

        if alias == lexeme.token:
            message = "unknown option %r at %s position" % (alias, ordinal(lexeme.index))
        else:
            message = "unknown option %r in %r at %s position" % (alias, lexeme.token, ordinal(lexeme.index))

        self._faults.append(UnknownOptionError(
            message,
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            token=lexeme.token,
            index=lexeme.index,
            input=alias,
            suggestions=suggestions,
            hint=hint,
        ))

    def _apply(self, option, alias, lexeme, value, /):
        """
        Run the action of a resolved option.

        value: the inline value (str, possibly empty) or None when there is none.
        """
        action = option.action
        context = Context(self, option, alias)
        logger.debug("matched %r for option %r", alias, option.name)

        if not action.takes_value:
            if value is not None:
                self._faults.append(UnexpectedValueError(
                    "option %r at %s position does not take a value" % (alias, ordinal(lexeme.index)),
                    title="unexpected value",
                    code=FaultCode.UNEXPECTED_VALUE,
                    token=lexeme.token,
                    index=lexeme.index,
                    input=alias,
                    hint="remove everything from '=' (for example: %s)" % alias,
                ))
                return
            if not isinstance(action, Invoke):
                return action.__apply__(context)
            try:
                return action.__apply__(context)
            except Exception as exception:
                self._faults.append(DelegatedOptionError(
                    "option %r at %s position failed: %s" % (alias, ordinal(lexeme.index), exception),
                    title="option failed",
                    code=FaultCode.DELEGATED_ERROR,
                    token=lexeme.token,
                    index=lexeme.index,
                    input=alias,
                    exception=exception,
                    hint="check the value given to %s" % alias,
                ))
                return

        if value is None:
            if (value := self._scanner.take()) is Unset:
                self._faults.append(MissingValueError(
                    "option %r at %s position expects a value" % (alias, ordinal(lexeme.index)),
                    title="missing value",
                    code=FaultCode.MISSING_VALUE,
                    token=lexeme.token,
                    index=lexeme.index,
                    input=alias,
                    hint="add a value after it (for example: %s <value> or %s=<value>)" % (alias, alias),
                ))
                return
            index = self._scanner.index
        else:
            index = lexeme.index
            if not value:
                logger.warning("empty inline value for option %r at %s position", alias, ordinal(index))

        try:
            converted = action.type(value)
        except (TypeError, ValueError) as exception:
            self._faults.append(InvalidValueError(
                "invalid value %r for option %r at %s position" % (value, alias, ordinal(index)),
                title="invalid value",
                code=FaultCode.INVALID_VALUE,
                token=value,
                index=index,
                input=alias,
                exception=exception,
                hint=str(exception) or "check the expected form of %s" % alias,
            ))
            return

        if action.choices and converted not in action.choices:
            self._faults.append(InvalidChoiceError(
                "invalid choice %r for option %r at %s position" % (value, alias, ordinal(index)),
                title="invalid choice",
                code=FaultCode.INVALID_CHOICE,
                token=value,
                index=index,
                input=alias,
                choices=action.choices,
                hint="choose one of %s" % ", ".join(map(repr, action.choices)),
            ))
            return

        action.__apply__(context, converted)
        logger.debug("bound %r to %r", converted, option.name)


__all__ = (
    "Context",
    "Outcome",
    "Parser",
)
