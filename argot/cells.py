"""
Argot shared value cells and value descriptors.

Ownership model
- Cell: a mutable box shared by reference. Every alias of one logical
  parameter holds the same Cell object, so a write through "-f" is visible
  through "--foo" and vice versa.
- Rhs: the per-alias right-hand side, a reference to the shared value Cell plus
  an occurrence counter that belongs to that alias only.
- Value descriptors (one per registry key):
  • Flag(rhs)            boolean cell, private counter.
  • Opt(rhs, found)      string cell, private counter, shared "found" Cell.
  • Setting(rhs, found)  same shape as Opt, registered under Long keys only.

The value and the found indicator are parameter-scoped, the counter is
alias-scoped. Nothing here synchronizes: a parser is driven by a single
thread of control.
"""


class Cell:
    """
    Mutable, shared value holder.

    Accessor handles returned by ArgParser.flag()/opt() are Cells: read or
    assign `.value` to inspect or change the parameter for every alias at once.
    """
    __slots__ = ("value",)

    def __init__(self, value, /):
        self.value = value

    def __repr__(self):
        return f"cell({self.value!r})"

    def __rich_repr__(self):
        yield self.value


class Rhs:
    """Right-hand side of one registry entry: shared cell + private counter."""
    __slots__ = ("value", "occurrences")

    def __init__(self, value, /):
        self.value = value
        self.occurrences = 0

    def __repr__(self):
        return f"rhs(value={self.value!r}, occurrences={self.occurrences!r})"


class Value:
    """
    Base value descriptor.

    Subclasses define the kind of parameter; parsing dispatches on them with
    isinstance checks, the accessors read them through `rhs` and `found`.
    """
    __slots__ = ("rhs",)
    __typename__ = "value"

    def __init__(self, rhs, /):
        self.rhs = rhs

    @property
    def occurrences(self):
        return self.rhs.occurrences

    @property
    def cell(self):
        return self.rhs.value

    def __repr__(self):
        return f"{type(self).__typename__}({self.rhs.value.value!r}, occurrences={self.rhs.occurrences!r})"

    def __rich_repr__(self):
        yield self.rhs.value.value
        yield "occurrences", self.rhs.occurrences


class Flag(Value):
    """Presence-only parameter backed by a shared boolean cell."""
    __slots__ = ()
    __typename__ = "flag"

    def enable(self):
        """Mark the flag as seen: set the shared boolean and bump this alias' counter."""
        self.rhs.value.value = True
        self.rhs.occurrences += 1

    def is_found(self):
        return bool(self.rhs.value.value)


class Parametric(Value):
    """
    Value-bearing descriptor (base of Opt and Setting).

    `found` is a Cell[bool] shared by every alias, just like the value cell.
    """
    __slots__ = ("found",)

    def __init__(self, rhs, found, /):
        super().__init__(rhs)
        self.found = found

    def assign(self, text):
        """
        Overwrite the shared value from an explicit 'name=value' assignment.

        The counter restarts at one when the cell was empty before the
        assignment, otherwise it is incremented.
        """
        if not self.rhs.value.value:
            self.rhs.occurrences = 1
        else:
            self.rhs.occurrences += 1
        self.rhs.value.value = text
        self.found.value = True

    def mention(self):
        """Record a bare use ('--name'): count it and mark found, keep the value."""
        self.rhs.occurrences += 1
        self.found.value = True

    def store(self, text):
        """Store a value given in short form ('-svalue' / '-s value'); the counter is untouched."""
        self.rhs.value.value = text
        self.found.value = True

    def is_found(self):
        return bool(self.found.value)

    def __repr__(self):
        return "%s(%r, found=%r, occurrences=%r)" % (
            type(self).__typename__, self.rhs.value.value, self.found.value, self.rhs.occurrences
        )

    def __rich_repr__(self):
        yield from super().__rich_repr__()
        yield "found", self.found.value


class Opt(Parametric):
    """Option: reachable as '-s value', '-svalue', '--name=value' or '--name'."""
    __slots__ = ()
    __typename__ = "opt"


class Setting(Parametric):
    """Setting: reachable only as bare 'name=value' (dd-style)."""
    __slots__ = ()
    __typename__ = "setting"


__all__ = (
    "Cell",
    "Rhs",
    "Value",
    "Flag",
    "Parametric",
    "Opt",
    "Setting",
)
