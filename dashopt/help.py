"""
dashopt help renderer.

Help(table, header, footer) lays out every option of a table as
"  -x, --name <metavar>   description" rows with hanging indents, followed by
the "--" separator entry. Calling a Help object prints it and returns Abort(0),
so it can back a help option directly:

    >>> table = init([Option("-h", "--help", action=CallVoid(lambda: help())), ...])
    >>> help = Help(table, "usage: prog [options] file...")

Palette keys (override through __styles__ in __main__)
- header-section, footer-section, group-label
- option-name, metavar, option-description
- panel-title
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .parser import Abort
from .table import OptionTable
from .utils import Unset, coalesce


class Help:
    def __init__(self, table, header=Unset, footer=Unset, *, colorful=True, fancy=False, console=Unset):
        if not isinstance(table, OptionTable):
            raise TypeError("Help() argument must be an OptionTable")
        for name, value in (("header", header), ("footer", footer)):
            if not isinstance(value, str | Unset):
                raise TypeError(f"Help() {name!r} must be a string")
        self.table = table
        self.header = coalesce(header)
        self.footer = coalesce(footer)
        self.colorful = colorful
        self.fancy = fancy
        self.console = coalesce(console, Console())

    def render(self):
        """
        Build the help as a rich renderable.
        """
        styles = defaultdict(str, {
            "header-section": "bold #36C5F0",  # sky-blue usage/header line
            "footer-section": "#737373",  # dim footer gray
            "group-label": "bold #FFFFFF",  # white section label
            "option-name": "bold #00E6FF",  # cyan option spellings
            "metavar": "bold #FFD600",  # amber placeholders
            "option-description": "#9CA3AF",  # muted gray
            "panel-title": "bold #FF4D94",  # magenta branding
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self.colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        width = self.console.width - 4 * self.fancy
        padding = 2
        indent = 24

        def entry(names, descr):
            section = Text(" " * padding).append(names)
            if descr := text(descr, "option-description"):
                if len(section) >= indent - 1:
                    section.append("\n").append(" " * indent)
                else:
                    section.append(" " * (indent - len(section)))
                lines = list(descr.wrap(self.console, max(width - indent, 10)))
                section.append(lines.pop(0) if lines else Text(""))
                for line in lines:
                    section.append("\n").append(" " * indent).append(line)
            return section

        renders = []
        if self.header:
            renders.append(text(self.header, "header-section").append("\n"))

        listing = Text()
        listing.append(text("options", "group-label")).append(":").append("\n")
        for option in self.table:
            names = Text(", ").join(text(name, "option-name") for name in option.names)
            match option.nargs:
                case 1:
                    names.append(" ").append(text("<%s>" % coalesce(option.metavar, "value"), "metavar"))
                case "?":
                    names.append(" ").append(Text.assemble("[", text("<%s>" % coalesce(option.metavar, "value"), "metavar"), "]"))
            listing.append(entry(names, option.descr)).append("\n")
        listing.append(entry(text("--", "option-name"), "Arguments following this are not treated as options."))
        renders.append(listing)

        if self.footer:
            renders.append(Text("\n").append(text(self.footer, "footer-section")))

        renderable = Group(*renders)
        if self.fancy:
            renderable = Panel(renderable, title=text("help", "panel-title"), title_align="left")
        return renderable

    def print(self):
        self.console.print(self.render())

    def __call__(self):
        self.print()
        return Abort(0)

    def __rich__(self):
        return self.render()


__all__ = (
    "Help",
)
