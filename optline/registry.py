r"""
Optline registry: the declared options, positionals and scan policy of a program.

Overview
- register(option) adds a descriptor; flag(), value(), append() and invoke()
  build and register one in a single call.
- positional(...) declares the slots, the rest collector and the tail target.
- reset(*presets) starts over with the bundled options ("help", "v",
  "verbose", "color", "quiet", "trace", and "default" for
  help + verbose + color).
- parse(argv, store) runs a Parser and returns its Outcome; run(argv, store)
  is the conventional exit path for scripts.

Uniqueness
- every alias, and every canonical name, belongs to one descriptor; a clash is
  a ConfigurationError raised by register(), whatever the registration order.

Host hooks (read from __main__)
- __prog__: program name shown in the synopsis and in the faults.
- __styles__: palette overrides for the usage text and the faults.
- __codes__: FaultCode remapping.
"""
import logging
import os
import sys
from types import MappingProxyType

from rich.console import Console

from . import logs
from .actions import *
from .faults import *
from .options import *
from .parser import Parser
from .usage import Usage
from .utils import *

logger = logging.getLogger(__name__)


def _help(context):
    Console().print(context.usage())
    sys.exit(0)


def _count(context):
    context.store["verbosity"] = context.store.get("verbosity", 0) + 1


def _quiet(context):
    context.store["quiet"] = True
    context.store["verbosity"] = 0


def _trace(context):
    context.store["trace"] = True
    logs.trace()


def _preset_help(registry):
    registry.invoke("h", "help", descr="Show help")(_help)


def _preset_v(registry):
    registry.invoke("v")(_count)


def _preset_verbose(registry):
    registry.invoke("verbose", descr="Show debug messages")(_count)


def _preset_color(registry):
    registry.flag("color", target="colorful", value=True)
    registry.flag("no-color", target="colorful", value=False)


def _preset_quiet(registry):
    registry.invoke("quiet")(_quiet)


def _preset_trace(registry):
    registry.invoke("trace")(_trace)


PRESETS = MappingProxyType({
    "help": (_preset_help,),
    "v": (_preset_v,),
    "verbose": (_preset_verbose,),
    "color": (_preset_color,),
    "quiet": (_preset_quiet,),
    "trace": (_preset_trace,),
    "default": (_preset_help, _preset_verbose, _preset_color),
})


class Registry:
    """
    Declared options and positionals of one program, built per run.

    Parameters
    - prog: program name; defaults to __main__.__prog__, then the basename of
      sys.argv[0].
    - break_on_first_positional: stop option scanning at the first free token;
      it and everything after it are positional, verbatim.
    - break_on_unknown: an unknown option stops scanning instead of failing;
      it and everything after it are positional, verbatim.
    - colorful: styled usage and faults by default.
    - fancy: render faults inside a panel.
    """

    def __init__(
            self,
            prog=Unset,
            /,
            *,
            break_on_first_positional=False,
            break_on_unknown=False,
            colorful=False,
            fancy=False,
    ):
        prog = coalesce(prog, getattr(__import__("__main__"), "__prog__", Unset))
        if prog is Unset:
            prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "prog"
        if not isinstance(prog, str):
            raise TypeError("Registry 'prog' must be a string")

        self._prog = prog
        self._break_on_first_positional = bool(break_on_first_positional)
        self._break_on_unknown = bool(break_on_unknown)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._options = {}
        self._aliases = {}
        self._positionals = Positionals()

    prog = mirror("prog")
    break_on_first_positional = mirror("break_on_first_positional")
    break_on_unknown = mirror("break_on_unknown")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    positionals = mirror("positionals")

    @property
    def options(self):
        return tuple(self._options.values())

    @property
    def aliases(self):
        return MappingProxyType(self._aliases)

    @property
    def required_positional_count(self):
        return len(self._positionals.required)

    def register(self, option, /):
        """
        Add a descriptor; every alias and the canonical name must be free.
        """
        if not isinstance(option, Option):
            raise TypeError("register() argument must be an option")

        for alias in option.aliases:
            if (other := self._aliases.get(alias)) is not None:
                raise ConfigurationError(
                    "alias %r of option %r is already used by option %r" % (switch(alias), option.name, other.name),
                    option
                )
        if option.name in self._options:
            raise ConfigurationError("option name %r is already in use" % option.name, option)

        self._options[option.name] = option
        for alias in option.aliases:
            self._aliases[alias] = option
        logger.debug("registered option %r as %s", option.name, "|".join(option.switches))
        return option

    def _target(self, aliases, target, name, /):
        if not aliases:
            raise ConfigurationError("option must specify at least one alias", aliases)
        if (target := coalesce(target, name)) is Unset and isinstance(aliases[-1], str):
            target = aliases[-1].strip().lstrip("-")
        return target

    def flag(self, *aliases, target=Unset, value=True, name=Unset, descr=""):
        target = self._target(aliases, target, name)
        return self.register(Option(*aliases, name=name, descr=descr, action=SetConstant(target, value)))

    def value(self, *aliases, target=Unset, type=str, choices=(), name=Unset, descr=""):
        target = self._target(aliases, target, name)
        return self.register(Option(*aliases, name=name, descr=descr, action=ReadValue(target, type, choices)))

    def append(self, *aliases, target=Unset, type=str, choices=(), name=Unset, descr=""):
        target = self._target(aliases, target, name)
        return self.register(Option(*aliases, name=name, descr=descr, action=AppendValue(target, type, choices)))

    def invoke(self, *aliases, name=Unset, descr=""):
        """
        Decorator registering the callback as an Invoke option.

            @registry.invoke("V", "version", descr="Show version")
            def version(context): ...
        """
        def decorator(callback, /):
            self.register(Option(*aliases, name=name, descr=descr, action=Invoke(callback)))
            return callback
        return decorator

    def positional(self, *slots, rest=Unset, tail=Unset):
        self._positionals = Positionals(*slots, rest=rest, tail=tail)
        return self._positionals

    def reset(self, *presets):
        """
        Forget every option and positional, then register the named presets.
        """
        self._options.clear()
        self._aliases.clear()
        self._positionals = Positionals()

        for preset in presets:
            try:
                builders = PRESETS[preset]
            except KeyError:
                logger.warning("unknown preset %r, skipped", preset)
                continue
            for builder in builders:
                builder(self)
        return self

    def lookup(self, alias, /):
        """
        Return the descriptor of an alias, bare or dashed; KeyError when absent.

        A dashed alias must use one dash for a single character and two
        otherwise ("-v", "--verbose"); "---v" or "--v" is never found.
        """
        if alias.startswith("--"):
            bare = alias[2:]
            if len(bare) < 2:
                raise KeyError(alias)
        elif alias.startswith("-"):
            bare = alias[1:]
            if len(bare) != 1:
                raise KeyError(alias)
        else:
            bare = alias
        return self._aliases[bare]

    def usage(self, *, colorful=Unset):
        return Usage(self, colorful=colorful)

    def render_usage(self):
        return self.usage().render()

    def parse(self, argv, store, /):
        return Parser(self, store).parse(argv)

    def run(self, argv=Unset, store=None, /, *, shell=True):
        """
        Parse, and on failure report every fault followed by the usage text.

        In shell mode the report goes to stderr and the process exits with
        status 1; otherwise a ParseExit is raised. Returns the store.
        """
        store = {} if store is None else store
        outcome = self.parse(argv, store)

        if not outcome.success:
            colorful = bool(store.get("colorful", self._colorful))
            trigger(
                ParseExit(outcome.diagnostics),
                shell=shell,
                colorful=colorful,
                fancy=self._fancy,
                prog=self._prog,
                usage=self.usage(colorful=colorful),
            )
        return store


__all__ = (
    "PRESETS",
    "Registry",
)
