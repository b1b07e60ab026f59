"""
Optline usage renderer: synopsis line, option table and argument table.

Layout
    usage: PROG [options] req [opt] [-- rest...]

    options:
      -h|--help          Show help
      --verbose          Show debug messages

    arguments:
      req                what the slot is for

- options are listed by canonical name; hidden ones (empty description) are
  left out, aliases keep their declaration order.
- the label column is as wide as the longest label, and never narrower than
  18 characters.
- the rest collector is always shown as "[-- rest...]"; a tail target adds
  "[-- tail...]" after it.

Palette keys
- usage-label, program-name, usage-section
- group-label, option-name, argument-name, argument-description

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed and the text is plain.
"""
from collections import defaultdict

from rich.text import Text

from .utils import *

COLUMN = 18


class Usage:
    """
    Renderer bound to one registry; pure, can be rendered any number of times.
    """

    def __init__(self, registry, /, *, colorful=Unset):
        self._registry = registry
        self._colorful = bool(coalesce(colorful, registry.colorful))

    @property
    def colorful(self):
        return self._colorful

    def _styler(self):
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # cyan headline
            "program-name": "bold #FF4D94",  # magenta-pink program name
            "usage-section": "bold #36C5F0",  # sky-blue synopsis items
            "group-label": "bold #FFFFFF",  # white table headers
            "option-name": "bold #00E6FF",  # cyan option labels
            "argument-name": "bold #FFD600",  # amber positional labels
            "argument-description": "#9CA3AF",  # muted gray descriptions
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self._colorful else ""
        return styler

    def synopsis(self):
        styler = self._styler()
        positionals = self._registry.positionals

        parts = []
        if self._registry.options:
            parts.append("[options]")
        for slot in positionals.slots:
            parts.append(slot.name if slot.required else "[%s]" % slot.name)
        if rest := positionals.rest:
            parts.append("[-- %s...]" % rest.name)
        if positionals.tail:
            parts.append("[-- %s...]" % positionals.tail)

        synopsis = Text()
        synopsis.append("usage", styler("usage-label")).append(":")
        synopsis.append(" ")
        synopsis.append(self._registry.prog, styler("program-name"))
        for part in parts:
            synopsis.append(" ")
            synopsis.append(part, styler("usage-section"))
        return synopsis

    def rows(self):
        """
        Yield (section, label, description) for every visible table row.
        """
        options = sorted((option for option in self._registry.options if not option.hidden), key=lambda x: x.name)
        for option in options:
            yield "options", "|".join(option.switches), option.descr

        positionals = self._registry.positionals
        for slot in positionals.slots:
            if slot.descr:
                yield "arguments", slot.name, slot.descr
        if (rest := positionals.rest) and rest.descr:
            yield "arguments", rest.name + "...", rest.descr

    def text(self):
        styler = self._styler()
        rows = list(self.rows())
        width = max([COLUMN, *(len(label) for _, label, _ in rows)])

        lines = [self.synopsis()]
        section = Unset
        for current, label, descr in rows:
            if current != section:
                section = current
                lines.append(Text())
                lines.append(Text(section + ":", styler("group-label")))
            line = Text("  ")
            line.append(label.ljust(width), styler("option-name" if section == "options" else "argument-name"))
            line.append(" ")
            line.append(descr, styler("argument-description"))
            lines.append(line)

        return Text("\n").join(lines)

    def render(self):
        return self.text().plain

    def __str__(self):
        return self.render()

    def __rich__(self):
        return self.text()


__all__ = (
    "Usage",
)
