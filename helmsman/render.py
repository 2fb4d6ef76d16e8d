"""
Rich renderers for help/usage and version output.

The engine never prints; these helpers read the same Schema it parses with and
return rich renderables for the caller to print.

Palette keys
- usage-label, program-name, usage-section, description-section
- group-label, argument-description, option-name, metavar, default-value
- children-title, children-table, children, children-description
- notes-label, notes-dot, note, examples-label, examples-dot, example
- program-version, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .utils import Unset


def _palette(colorful):
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "description-section": "italic #A3A3A3",  # Neutral gray

        # === Groups / options ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "argument-description": "#9CA3AF",  # Muted gray
        "option-name": "bold #00E6FF",  # CYAN for options
        "metavar": "bold #FFD600",  # AMBER for parameters
        "default-value": "#737373",  # Dim footer gray

        # === Commands table ===
        "children-title": "bold #FFFFFF",
        "children-table": "#4B5563",  # Slate border
        "children": "bold #36C5F0",  # Sky-blue commands
        "children-description": "#9CA3AF",

        # === Notes / Examples ===
        "notes-label": "bold #00E6FF",
        "notes-dot": "#00E6FF dim",
        "note": "#D1D5DB",
        "examples-label": "bold #22C55E",
        "examples-dot": "#22C55E dim",
        "example": "#E5E7EB",

        # === Version / panel ===
        "program-version": "bold #00E6FF",
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), styler(style))

    return styler, text


def _names(option):
    names = sorted({option.key, *filter(None, [option.alias])}, key=lambda name: (len(name) > 1, len(name)))
    return ", ".join(("-" if len(name) == 1 else "--") + name for name in names)


def _metavar(option):
    match option.type:
        case "string":
            return "<string>"
        case "number":
            return "<number>"
        case "either":
            return "[string]"
    return ""


def _default(option):
    if option.placeholder:
        return "[default: %s]" % option.placeholder
    if option.type == "boolean" or option.default is Unset or option.default is None or option.default is False:
        return ""
    return "[default: %s]" % option.default


def render_help(schema, command=None, /, *, prog="helmsman", descr=None, notes=(), examples=(), colorful=True, fancy=False):
    """
    Build the help renderable for a schema, or for one of its commands.

    Sections
    - usage line (the command's template when one is given)
    - description
    - commands table (root help only; hidden commands skipped, default marked)
    - option groups in declaration order (hidden options skipped), each row with
      names, value placeholder, description and default
    - notes and examples as bulleted lists
    """
    styler, text = _palette(colorful)
    renders = []

    usage = Text()
    usage.append(text("usage", "usage-label")).append(": ")
    usage.append(text(prog, "program-name")).append(" ")
    if command is not None:
        usage.append(text(command.usage, "usage-section"))
    else:
        usage.append(text(" ".join(["[command]", *map(str, schema.default.template)]), "usage-section"))
    usage.append(" ").append(text("[options]", "usage-section"))
    renders.append(usage)

    if descr := (command.descr if command is not None else descr):
        renders.append(text(descr, "description-section"))

    if command is None and (visible := [spec for spec in schema.commands.values() if not spec.hidden]):
        table = Table(
            "command", "help",
            title=text("commands", "children-title"),
            box=ROUNDED,
            style=styler("children-table"),
            header_style=styler("children-title"),
        )
        for spec in visible:
            help = text(spec.descr or "", "children-description")
            if spec.default:
                help.append(text(" [default]", "default-value"))
            table.add_row(text(spec.usage, "children"), help)
        renders.append(table)

    for group, options in schema.groups.items():
        if not (options := [option for option in options if not option.hidden]):
            continue
        grid = Table.grid(padding=(0, 2))
        grid.add_column(no_wrap=True)
        grid.add_column(no_wrap=True)
        grid.add_column()
        grid.add_column(no_wrap=True)
        for option in options:
            grid.add_row(
                Text("  ") + text(_names(option), "option-name"),
                text(_metavar(option), "metavar"),
                text(option.descr or "", "argument-description"),
                text(_default(option), "default-value"),
            )
        renders.append(Group(text(group, "group-label").append(":"), grid))

    for label, entries in (("notes", notes), ("examples", examples)):
        if not entries:
            continue
        section = Text()
        section.append(text(label, label + "-label")).append(":")
        for entry in entries:
            section.append("\n").append(text(" • ", label + "-dot")).append(text(entry, label[:-1]))
        renders.append(section)

    renderable = Group(*renders)
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{prog} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )
    return renderable


def render_version(prog, version, /, *, colorful=True, fancy=False):
    """
    Build the version renderable: "<prog> — <version>".
    """
    styler, text = _palette(colorful)
    renderable = Text(" — ").join((text(prog, "program-name"), text(version, "program-version")))
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{prog} VERSION".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )
    return renderable


__all__ = (
    "render_help",
    "render_version",
)
