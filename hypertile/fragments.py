"""Load the combinatorial description of a tiling.

A tiling definition is plain text with one *fragment* (tile type) per
line. Line `k` (counting from 1) describes fragment `k`. A blank line
is a fragment with no neighbors, and trailing blank lines are ignored:

```
[RRGGBB;]branch,branch,...,branch
```

There is one branch per side of the tile. A branch is either a
fragment id, or a fragment id followed by `+` and a rotation offset.
An id of `0` (or an empty branch) means that there is no tile across
that side.

```python
from hypertile import fragments

table = fragments.parse_definition("ff0000;1,1+2,0,", sides=4)
table[0].branches
```
    (Branch(neighbor=0, rotation=0), Branch(neighbor=0, rotation=2),
     Branch(neighbor=None, rotation=0), Branch(neighbor=None, rotation=0))

In memory, neighbors are 0-based and "no neighbor" is `None`.

Loading is lenient: a line which fails to parse is dropped with a
`TilingDefinitionWarning`, and the remaining lines are still
loaded. Note that dropping a line shifts the ids of every later
fragment, so a reference past the dropped line may end up pointing
outside the table, which rejects the whole table with a
`FragmentTableError`.

"""

import re
import warnings
from collections import namedtuple
from importlib import resources

from matplotlib import colors as mcolors

from hypertile.base import FragmentTableError, TilingDefinitionWarning

BUILTIN_PACKAGE = "hypertile"
BUILTIN_DIR = "builtin"
BUILTIN_SUFFIX = ".tiling"

COLOR_SEPARATOR = ";"
BRANCH_SEPARATOR = ","

DEFAULT_COLORS = [mcolors.to_rgb(name) for name in [
    "royalblue", "lightgreen", "salmon", "khaki",
    "plum", "lightskyblue", "sandybrown", "lightgray"
]]

BRANCH_PATTERN = re.compile(r"^\s*(\d*)\s*(?:\+\s*(\d+)\s*)?$")
HEX_COLOR_PATTERN = re.compile(r"^\s*#?([0-9a-fA-F]{6})\s*$")

Branch = namedtuple("Branch", ["neighbor", "rotation"])

EMPTY_BRANCH = Branch(None, 0)

class DefinitionParseError(ValueError):
    pass

class Fragment:
    """One tile type: where each of its sides leads, and its color.

    Attributes
    ----------
    branches : tuple(Branch)
        one `Branch` per side of the tile, in the tile's own
        orientation.
    color : tuple or None
        RGB color for this fragment, or `None` to use the default
        palette.

    """
    def __init__(self, branches, color=None):
        self.branches = tuple(branches)
        self.color = color

    def neighbors(self):
        return [branch.neighbor for branch in self.branches
                if branch.neighbor is not None]

    def __eq__(self, other):
        try:
            return (self.branches == other.branches and
                    self.color == other.color)
        except AttributeError:
            return False

    def __repr__(self):
        return "Fragment({}, color={})".format(list(self.branches), self.color)

class FragmentTable:
    """The ordered list of fragments making up a tiling definition.

    Fragment ids are indices into this table (0-based). Every branch of
    every fragment refers either to no tile or to a fragment in the
    table.

    """
    def __init__(self, fragments, sides):
        self.sides = sides
        self.fragments = list(fragments)

        for fragment in self.fragments:
            if len(fragment.branches) != sides:
                raise FragmentTableError(
                    "Fragment {} has {} branches, expected {}".format(
                        fragment, len(fragment.branches), sides)
                )

        self._check_neighbors()

    def _check_neighbors(self):
        for index, fragment in enumerate(self.fragments):
            for neighbor in fragment.neighbors():
                if neighbor >= len(self.fragments):
                    raise FragmentTableError(
                        ("Fragment {} refers to fragment {}, but the table"
                         " only has {} fragments").format(
                             index + 1, neighbor + 1, len(self.fragments))
                    )

    def __len__(self):
        return len(self.fragments)

    def __getitem__(self, index):
        return self.fragments[index]

    def __iter__(self):
        return iter(self.fragments)

    def branch(self, fragment_id, side):
        """Get the branch across a side of a fragment.

        Fragments which are not in the table (which only happens for
        the root of an empty table) have no neighbors.

        """
        if not 0 <= fragment_id < len(self.fragments):
            return EMPTY_BRANCH

        return self.fragments[fragment_id].branches[side % self.sides]

    def color(self, fragment_id):
        """Get the RGB color of a fragment, falling back to the default
        palette.

        """
        if 0 <= fragment_id < len(self.fragments):
            color = self.fragments[fragment_id].color
            if color is not None:
                return color

        return DEFAULT_COLORS[fragment_id % len(DEFAULT_COLORS)]

    def colors(self):
        return [self.color(i) for i in range(max(len(self), 1))]

def parse_color(text):
    """Parse an `RRGGBB` (or `#RRGGBB`) hex literal to an RGB triple.

    Raises
    ------
    ValueError
        Raised if `text` is not a hex color literal.

    """
    match = HEX_COLOR_PATTERN.match(text)
    if not match:
        raise ValueError("Invalid hex color literal: '{}'".format(text))

    return mcolors.to_rgb("#" + match.group(1))

def parse_branch(text):
    match = BRANCH_PATTERN.match(text)
    if not match:
        raise DefinitionParseError("Invalid branch: '{}'".format(text))

    neighbor_str, rotation_str = match.groups()
    rotation = 0
    if rotation_str:
        rotation = int(rotation_str)

    if not neighbor_str or int(neighbor_str) == 0:
        return Branch(None, rotation)

    return Branch(int(neighbor_str) - 1, rotation)

def parse_fragment(line, sides):
    """Parse a single line of a tiling definition.

    Short branch lists are padded with empty branches (with a
    warning). Branch lists longer than `sides` are an error.

    Raises
    ------
    ValueError
        Raised if the color or any of the branches fail to parse, or if
        there are too many branches.

    """
    color = None
    body = line
    if COLOR_SEPARATOR in line:
        color_str, body = line.split(COLOR_SEPARATOR, 1)
        color = parse_color(color_str)

    branches = [parse_branch(text) for text in body.split(BRANCH_SEPARATOR)]

    if len(branches) > sides:
        raise DefinitionParseError(
            "Expected {} branches, got {}: '{}'".format(
                sides, len(branches), line.strip())
        )

    if len(branches) < sides:
        warnings.warn(
            "Padding fragment '{}' with {} empty branches".format(
                line.strip(), sides - len(branches)),
            TilingDefinitionWarning
        )
        branches += [EMPTY_BRANCH] * (sides - len(branches))

    return Fragment(branches, color)

def parse_definition(text, sides):
    """Parse the text of a tiling definition.

    Parameters
    ----------
    text : str
        the definition, one fragment per line
    sides : int
        number of sides of each tile

    Returns
    -------
    FragmentTable

    Raises
    ------
    FragmentTableError
        Raised if the fragments which did parse refer to fragments
        which are not in the table.

    """
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()

    fragments = []
    for line_number, line in enumerate(lines, start=1):
        # blank lines keep their place in the numbering
        if not line.strip():
            fragments.append(Fragment([EMPTY_BRANCH] * sides))
            continue

        try:
            fragments.append(parse_fragment(line, sides))
        except ValueError as e:
            warnings.warn(
                "Skipping line {} of tiling definition: {}".format(
                    line_number, e),
                TilingDefinitionWarning
            )

    return FragmentTable(fragments, sides)

def load_file(filename, sides):
    with open(filename, "r") as definition_file:
        return parse_definition(definition_file.read(), sides)

def builtin_names():
    """List the names of the tiling definitions shipped with this package."""
    builtin = resources.files(BUILTIN_PACKAGE).joinpath(BUILTIN_DIR)
    return sorted(entry.name[:-len(BUILTIN_SUFFIX)]
                  for entry in builtin.iterdir()
                  if entry.name.endswith(BUILTIN_SUFFIX))

def builtin_text(name):
    definition = resources.files(BUILTIN_PACKAGE).joinpath(
        BUILTIN_DIR).joinpath(name + BUILTIN_SUFFIX)
    return definition.read_text()

def load_builtin(name, sides):
    """Load a tiling definition shipped with this package.

    Raises
    ------
    OSError
        Raised if there is no builtin definition with this name.

    """
    return parse_definition(builtin_text(name), sides)
